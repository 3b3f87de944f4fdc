"""
Locust Load Test Suite

Run scenarios:
  locust -f locustfile.py --tags registration  # Many users apply to one event
  locust -f locustfile.py --tags throughput    # Test listing cache
  locust -f locustfile.py --tags edge          # Test bad input
  locust -f locustfile.py                      # All tests
"""

import random
import string
from locust import HttpUser, task, between, tag, events
from datetime import datetime, timezone, timedelta

# Shared state
EVENT_IDS = []
HOT_EVENT = {"id": None, "headers": None}
PASSWORD = "loadtest123"


def random_email():
    return f"load_{random.randint(10000, 99999)}_{random.randint(0, 999)}@test.com"


def random_name():
    return "User " + "".join(random.choices(string.ascii_lowercase, k=8))


def future_date(days: int) -> str:
    return (datetime.now(timezone.utc) + timedelta(days=days)).isoformat()


def event_payload(title: str, days: int) -> dict:
    return {
        "title": title,
        "description": "Load test event",
        "organizer": "Load Test",
        "organizerEmail": "load@test.com",
        "date": future_date(days),
        "location": random.choice(["Lagos", "Nairobi", "Accra", "Kigali"]),
        "skillsRequired": random.choice(["Python", "Python,SQL", "Rust", "Design"]),
        "categories": random.choice(["Tech", "Meetup", "Workshop"]),
    }


def sign_up(client) -> dict:
    """Register and log in a fresh account; returns auth headers or {}."""
    email = random_email()
    client.post("/api/auth/register", json={
        "name": random_name(),
        "email": email,
        "password": PASSWORD,
    })
    resp = client.post("/api/auth/login", json={"email": email, "password": PASSWORD})
    if resp.status_code == 200:
        return {"Authorization": f"Bearer {resp.json()['accessToken']}"}
    return {}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("\n" + "=" * 60)
    print("SETUP: the first registration user creates the shared event")
    print("=" * 60)


class RegistrationUser(HttpUser):
    """
    TEST 1: Registration burst - every user applies to the same event once

    Run: locust -f locustfile.py --tags registration -u 100 -r 50 --run-time 30s

    After test, verify one row per user:
      SELECT user_id, COUNT(*) FROM registrations WHERE event_id = X
      GROUP BY user_id HAVING COUNT(*) > 1;
    Should return nothing.
    """
    wait_time = between(0, 0.1)

    def on_start(self):
        self.headers = sign_up(self.client)
        self.registration_id = None

        if self.headers and not HOT_EVENT["id"]:
            resp = self.client.post(
                "/api/events", json=event_payload("Registration Burst", 30), headers=self.headers
            )
            if resp.status_code == 201:
                HOT_EVENT["id"] = resp.json()["id"]
                HOT_EVENT["headers"] = self.headers
                print(f"\nCreated event {HOT_EVENT['id']}\n")

    @tag("registration")
    @task(3)
    def register(self):
        """Apply once; later attempts must come back as duplicates."""
        if not HOT_EVENT["id"] or not self.headers:
            return

        with self.client.post(
            f"/api/events/{HOT_EVENT['id']}/register",
            json={"contact": "load@test.com"},
            headers=self.headers,
            name="/api/events/{id}/register",
            catch_response=True,
        ) as resp:
            if resp.status_code == 201:
                self.registration_id = resp.json()["registration"]["id"]
                resp.success()
            elif resp.status_code == 400:
                resp.success()  # Expected: already registered
            else:
                resp.failure(f"Unexpected: {resp.status_code}")

    @tag("registration")
    @task(1)
    def organizer_approves_and_checks_in(self):
        """The organizer works through this user's registration."""
        if not self.registration_id or not HOT_EVENT["headers"]:
            return

        event_id = HOT_EVENT["id"]
        with self.client.put(
            f"/api/events/{event_id}/registrations/{self.registration_id}/status",
            json={"status": "approved"},
            headers=HOT_EVENT["headers"],
            name="/api/events/{id}/registrations/{id}/status",
            catch_response=True,
        ) as resp:
            if resp.status_code in (200, 400):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")

        with self.client.put(
            f"/api/events/{event_id}/checkin/{self.registration_id}",
            headers=HOT_EVENT["headers"],
            name="/api/events/{id}/checkin/{id}",
            catch_response=True,
        ) as resp:
            if resp.status_code in (200, 400):
                resp.success()
            else:
                resp.failure(f"Unexpected: {resp.status_code}")


class ThroughputUser(HttpUser):
    """
    TEST 2: Throughput - Cache effectiveness

    Run twice:
      1. With Redis: locust -f locustfile.py --tags throughput -u 100 -r 20 --run-time 60s
      2. Without Redis: REDIS_ENABLED=False, run again

    Compare avg response time, requests/sec and P95/P99 latency.
    """
    wait_time = between(0.1, 0.5)

    @tag("throughput", "read")
    @task(10)
    def list_events_cached(self):
        page = random.randint(1, 5)
        self.client.get(f"/api/events?page={page}&pageSize=20", name="/api/events [cached]")

    @tag("throughput", "read")
    @task(4)
    def list_events_filtered(self):
        location = random.choice(["lagos", "nairobi", "accra"])
        self.client.get(f"/api/events?location={location}&sortBy=date_asc", name="/api/events [filtered]")

    @tag("throughput", "read")
    @task(3)
    def get_event_detail(self):
        if EVENT_IDS:
            self.client.get(f"/api/events/{random.choice(EVENT_IDS)}", name="/api/events/{id}")

    @tag("throughput")
    @task(1)
    def health_check(self):
        self.client.get("/health")


class EdgeCaseUser(HttpUser):
    """
    TEST 3: Edge cases - Bad input handling

    Run: locust -f locustfile.py --tags edge -u 20 -r 5 --run-time 30s

    System should NOT crash, return proper error codes.
    """
    wait_time = between(0.5, 1.5)

    def on_start(self):
        self.headers = sign_up(self.client)

    def _expect(self, resp, codes):
        if resp.status_code in codes:
            resp.success()
        else:
            resp.failure(f"Expected {codes}, got {resp.status_code}")

    @tag("edge")
    @task
    def register_unknown_event(self):
        with self.client.post(
            "/api/events/999999/register", headers=self.headers, catch_response=True
        ) as resp:
            self._expect(resp, [404])

    @tag("edge")
    @task
    def invalid_status_value(self):
        with self.client.put(
            "/api/events/1/registrations/1/status",
            json={"status": "maybe"},
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def manage_someone_elses_event(self):
        if not HOT_EVENT["id"]:
            return
        with self.client.put(
            f"/api/events/{HOT_EVENT['id']}/checkin/1",
            headers=self.headers,
            catch_response=True,
        ) as resp:
            self._expect(resp, [403])

    @tag("edge")
    @task
    def past_event_date(self):
        with self.client.post(
            "/api/events", json=event_payload("Yesterday", -1), headers=self.headers, catch_response=True
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def malformed_json(self):
        with self.client.post(
            "/api/posts",
            data="not json at all",
            headers={**self.headers, "Content-Type": "application/json"},
            catch_response=True,
        ) as resp:
            self._expect(resp, [400])

    @tag("edge")
    @task
    def missing_auth(self):
        with self.client.post("/api/events/1/register", catch_response=True) as resp:
            self._expect(resp, [401])


class RealisticUser(HttpUser):
    """
    TEST 4: Realistic mixed workload

    Run: locust -f locustfile.py -u 200 -r 20 --run-time 120s

    Mostly browsing, some registrations and social activity, rare event creation.
    """
    wait_time = between(1, 3)

    def on_start(self):
        self.headers = sign_up(self.client)

    @task(40)
    def browse_events(self):
        resp = self.client.get("/api/events?page=1&pageSize=20")
        if resp.status_code == 200:
            for event in resp.json().get("events", []):
                if event["id"] not in EVENT_IDS:
                    EVENT_IDS.append(event["id"])

    @task(15)
    def view_event(self):
        if EVENT_IDS:
            self.client.get(f"/api/events/{random.choice(EVENT_IDS)}", name="/api/events/{id}")

    @task(10)
    def register(self):
        if EVENT_IDS and self.headers:
            self.client.post(
                f"/api/events/{random.choice(EVENT_IDS)}/register",
                headers=self.headers,
                name="/api/events/{id}/register",
            )

    @task(8)
    def read_feed(self):
        if self.headers:
            self.client.get("/api/posts", headers=self.headers)
            self.client.get("/api/notifications/my", headers=self.headers)

    @task(4)
    def post_update(self):
        if self.headers:
            self.client.post(
                "/api/posts", json={"text": f"Status {random.randint(1, 10000)}"}, headers=self.headers
            )

    @task(3)
    def create_event(self):
        if self.headers:
            resp = self.client.post(
                "/api/events",
                json=event_payload(f"Event {random.randint(1, 10000)}", random.randint(1, 90)),
                headers=self.headers,
            )
            if resp.status_code == 201:
                EVENT_IDS.append(resp.json()["id"])

import random
import time

from locust import HttpUser, task, between, events

BASE_URL = "http://127.0.0.1:3000"

EVENT_NAMES = [
    "ProductDetailsView",
    "ProductAddToCart",
    "MyCustomEvent",
    "MyCustomWishlistEvent",
    "Purchase",
]
product_ids = [f"p{i}" for i in range(1, 201)]


def make_event(now: int) -> dict:
    name = random.choice(EVENT_NAMES)
    ts = now - random.randint(0, 30 * 86400)
    shape = random.randint(0, 2)
    if shape == 0:
        return {"name": name, "timestamp": ts, "productIds": random.sample(product_ids, random.randint(1, 3))}
    if shape == 1:
        return {"name": name, "timestamp": ts, "data": {"products": [{"id": random.choice(product_ids)}]}}
    return {"name": name, "timestamp": ts, "data": {"id": random.choice(product_ids)}}


@events.test_start.add_listener
def on_test_start(environment, **kwargs):
    print("=" * 60)
    print(f"Load testing {environment.host or BASE_URL} with {len(product_ids)} products")
    print("=" * 60)


class RecommendUser(HttpUser):

    wait_time = between(1, 3)

    host = BASE_URL

    @task(10)
    def recommend(self):
        now = int(time.time())
        body = {"events": [make_event(now) for _ in range(random.randint(1, 50))]}
        n = random.randint(1, 10)

        with self.client.post(
                f"/recommend?requestedItems={n}",
                json=body,
                catch_response=True,
                name="POST /recommend"
        ) as response:
            if response.status_code != 200:
                response.failure(f"Status code: {response.status_code}")
                return
            try:
                data = response.json()
            except ValueError:
                response.failure("Invalid JSON response")
                return
            if not isinstance(data, list) or len(data) > n:
                response.failure(f"Unexpected result: {data!r}")
            else:
                response.success()

    @task(2)
    def recommend_malformed(self):
        with self.client.post(
                "/recommend",
                data="{not json",
                catch_response=True,
                name="POST /recommend (malformed)"
        ) as response:
            if response.status_code == 400 and response.text == "[]":
                response.success()
            else:
                response.failure(f"Status code: {response.status_code}")

    @task(1)
    def health(self):
        self.client.get("/health", name="GET /health")

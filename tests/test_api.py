"""End-to-end tests for the ingestion HTTP API.

Requests run through the real ingestor, a file-backed job store and the
dispatch worker pool; work items land in an in-memory queue.
"""

from unittest.mock import Mock

import pytest
from fastapi.testclient import TestClient

from crawl_intake.api import create_app
from crawl_intake.dispatch import DispatchFanout, DispatchWorkerPool
from crawl_intake.domain.models import INVALID_ID
from crawl_intake.ingestion import JobIngestor
from crawl_intake.persistence.exceptions import PersistenceError
from crawl_intake.persistence.store import JobStore
from crawl_intake.queue.memory import InMemoryQueuePublisher


@pytest.fixture
def publisher():
    return InMemoryQueuePublisher("test")


@pytest.fixture
def dispatcher(job_store, publisher):
    return DispatchWorkerPool(DispatchFanout(job_store, publisher), worker_count=2)


@pytest.fixture
def client(job_store, dispatcher):
    app = create_app(JobIngestor(job_store, dispatcher), dispatcher=dispatcher, shutdown_timeout=5)
    with TestClient(app) as test_client:
        yield test_client


class TestSubmitUrls:
    """Tests for POST /."""

    def test_creates_job_and_publishes_deduplicated_urls(self, client, dispatcher, publisher, job_store):
        response = client.post("/", content="https://a.com\nhttp://b.com\nhttps://a.com")

        assert response.status_code == 200
        job_id = response.json()["jobId"]
        assert job_id > INVALID_ID

        dispatcher.join()
        items = publisher.items
        assert len(items) == 2

        job = job_store.get_job(job_id)
        assert [record.url for record in job.urls] == ["https://a.com", "http://b.com"]
        assert [item.url_id for item in items] == job.url_ids
        for item in items:
            assert item.job_id == job_id
            assert item.origin_id == item.url_id
            assert item.refer_id == INVALID_ID
            assert item.force_crawl is False

        assert sorted(job_store.list_pending(job_id)) == sorted(
            (url_id, url_id) for url_id in job.url_ids
        )

    def test_force_crawl_presence_sets_flag(self, client, dispatcher, publisher):
        response = client.post("/?forceCrawl", content="https://a.com")

        assert response.status_code == 200
        dispatcher.join()
        assert [item.force_crawl for item in publisher.items] == [True]

    def test_force_crawl_value_is_ignored(self, client, dispatcher, publisher):
        response = client.post("/?forceCrawl=false", content="https://a.com")

        assert response.status_code == 200
        dispatcher.join()
        assert publisher.items[0].force_crawl is True

    def test_scheme_defaults_to_http(self, client, dispatcher, job_store):
        response = client.post("/", content="example.com/docs\n")

        dispatcher.join()
        job = job_store.get_job(response.json()["jobId"])
        assert [record.url for record in job.urls] == ["http://example.com/docs"]

    def test_each_request_creates_new_job(self, client):
        first = client.post("/", content="https://a.com").json()["jobId"]
        second = client.post("/", content="https://a.com").json()["jobId"]

        assert first != second

    def test_invalid_url_is_bad_request(self, client, dispatcher, publisher):
        response = client.post("/", content="https://a.com\n/nohost")

        assert response.status_code == 400
        assert response.json() == {"code": "BadRequest", "message": "Invalid URL: /nohost"}
        dispatcher.join()
        assert publisher.items == []

    def test_empty_body_is_bad_request(self, client):
        response = client.post("/", content="")

        assert response.status_code == 400
        assert response.json() == {"code": "BadRequest", "message": "No URLs provided"}

    def test_blank_lines_only_is_bad_request(self, client):
        response = client.post("/", content="\n\n  \n")

        assert response.status_code == 400
        assert response.json()["message"] == "No URLs provided"

    def test_undecodable_body_is_bad_request(self, client):
        response = client.post("/", content=b"\xff\xfe\xfd")

        assert response.status_code == 400
        assert response.json() == {"code": "BadRequest", "message": "Unexpected error in input"}


class TestDependencyFailure:
    """Job store failures surface as 500 DependancyFailure."""

    def test_store_failure_returns_500(self):
        job_store = Mock(spec=JobStore)
        job_store.create_job_from_urls.side_effect = PersistenceError("database is locked")
        dispatcher = Mock(spec=DispatchWorkerPool)
        app = create_app(JobIngestor(job_store, dispatcher))

        with TestClient(app) as client:
            response = client.post("/", content="https://a.com")

        assert response.status_code == 500
        assert response.json() == {"code": "DependancyFailure", "message": "Create Job Failed"}
        dispatcher.submit.assert_not_called()


class TestOtherRoutes:
    """Tests for method handling and health."""

    @pytest.mark.parametrize("method", ["GET", "PUT", "DELETE", "PATCH"])
    def test_other_methods_not_allowed(self, client, method):
        response = client.request(method, "/")

        assert response.status_code == 405
        assert response.headers["Allow"] == "POST"
        assert response.text == "MethodNotAllowed"

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}

    def test_lifespan_starts_and_stops_dispatcher(self, job_store, publisher):
        dispatcher = DispatchWorkerPool(DispatchFanout(job_store, publisher), worker_count=1)
        app = create_app(JobIngestor(job_store, dispatcher), dispatcher=dispatcher)

        with TestClient(app):
            assert dispatcher.scheduler.running

        assert not dispatcher.scheduler.running

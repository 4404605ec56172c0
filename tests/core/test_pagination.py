"""Tests for the paginating invoker."""

import pytest

from ghrest.core.errors import GitHubApiError
from ghrest.core.paging import invoke_rest_method_multiple_result, iter_pages, page_count

API = "https://api.github.com"


class TestPageCount:
    def test_reads_page_parameter(self):
        assert page_count(f"{API}/repos/o/r/issues?state=all&page=7") == 7

    def test_missing_or_invalid(self):
        assert page_count(None) is None
        assert page_count(f"{API}/x?per_page=100") is None
        assert page_count(f"{API}/x?page=last") is None


class TestMultipleResult:
    def test_concatenates_pages_in_order(self, session, http, make_response, make_links):
        first = [{"id": i} for i in range(30)]
        second = [{"id": i} for i in range(30, 40)]
        http.add(
            make_response(200, first, headers=make_links(f"{API}/x?page=2", f"{API}/x?page=2")),
            make_response(200, second),
        )

        result = invoke_rest_method_multiple_result(session, "x")

        assert [r["id"] for r in result] == list(range(40))
        assert [c.url for c in http.calls] == [f"{API}/x", f"{API}/x?page=2"]

    def test_duplicates_are_kept(self, session, http, make_response, make_links):
        http.add(
            make_response(200, [{"id": 1}], headers=make_links(f"{API}/x?page=2")),
            make_response(200, [{"id": 1}]),
        )
        assert invoke_rest_method_multiple_result(session, "x") == [{"id": 1}, {"id": 1}]

    def test_unwraps_collection_key(self, session, http, make_response):
        http.add(make_response(200, {"total_count": 2, "codespaces": [{"name": "a"}, {"name": "b"}]}))
        result = invoke_rest_method_multiple_result(session, "user/codespaces", unwrap_key="codespaces")
        assert [r["name"] for r in result] == ["a", "b"]

    def test_single_object_becomes_one_record(self, session, http, make_response):
        http.add(make_response(200, {"id": 9}))
        assert invoke_rest_method_multiple_result(session, "x") == [{"id": 9}]

    def test_empty_page(self, session, http, make_response):
        http.add(make_response(200, []))
        assert invoke_rest_method_multiple_result(session, "x") == []

    def test_single_page_ignores_next_link(self, session, http, make_response, make_links):
        http.add(make_response(200, [1, 2], headers=make_links(f"{API}/x?page=2")))
        assert invoke_rest_method_multiple_result(session, "x", single_page=True) == [1, 2]
        assert len(http.calls) == 1

    def test_failing_page_raises(self, session, http, make_response, make_links):
        http.add(
            make_response(200, [1], headers=make_links(f"{API}/x?page=2")),
            make_response(500, {"message": "Server Error"}),
        )
        with pytest.raises(GitHubApiError) as info:
            invoke_rest_method_multiple_result(session, "x")
        assert info.value.status_code == 500

    def test_token_sent_on_every_page(self, authed_session, http, make_response, make_links):
        http.add(
            make_response(200, [1], headers=make_links(f"{API}/x?page=2")),
            make_response(200, [2]),
        )
        invoke_rest_method_multiple_result(authed_session, "x")
        assert all(c.headers["Authorization"] == "token ghp_testtoken" for c in http.calls)


class TestIterPages:
    def test_yields_responses_lazily(self, session, http, make_response, make_links):
        http.add(make_response(200, [1], headers=make_links(f"{API}/x?page=2")))
        pages = iter_pages(session, "x")
        first = next(pages)
        assert first.result == [1]
        assert first.next_link == f"{API}/x?page=2"
        assert len(http.calls) == 1


class RecordingProgress:
    """Stands in for rich.progress.Progress and remembers how it was driven."""

    instances: list["RecordingProgress"] = []

    def __init__(self, *args, **kwargs):
        self.started = False
        self.stopped = False
        self.tasks = []
        self.updates = []
        RecordingProgress.instances.append(self)

    def start(self):
        self.started = True

    def stop(self):
        self.stopped = True

    def add_task(self, description, total=None):
        self.tasks.append((description, total))
        return len(self.tasks) - 1

    def update(self, task, completed=None):
        self.updates.append(completed)


class TestProgress:
    @pytest.fixture(autouse=True)
    def recording_progress(self, monkeypatch):
        RecordingProgress.instances = []
        monkeypatch.setattr("ghrest.core.paging.Progress", RecordingProgress)

    def _two_pages(self, http, make_response, make_links):
        http.add(
            make_response(200, [1], headers=make_links(f"{API}/x?page=2", f"{API}/x?page=2")),
            make_response(200, [2]),
        )

    def test_shown_at_threshold(self, session, http, make_response, make_links):
        session.config_store.set("multi_request_progress_threshold", 2, session_only=True)
        self._two_pages(http, make_response, make_links)

        assert invoke_rest_method_multiple_result(session, "x", description="Listing") == [1, 2]

        [bar] = RecordingProgress.instances
        assert bar.started and bar.stopped
        assert bar.tasks == [("Listing", 2)]
        assert bar.updates == [1, 2]

    def test_not_shown_below_threshold(self, session, http, make_response, make_links):
        self._two_pages(http, make_response, make_links)
        invoke_rest_method_multiple_result(session, "x")
        assert RecordingProgress.instances == []

    def test_no_status_argument(self, session, http, make_response, make_links):
        session.config_store.set("multi_request_progress_threshold", 2, session_only=True)
        self._two_pages(http, make_response, make_links)
        invoke_rest_method_multiple_result(session, "x", no_status=True)
        assert RecordingProgress.instances == []

    def test_default_no_status_setting(self, session, http, make_response, make_links):
        session.config_store.set("multi_request_progress_threshold", 2, session_only=True)
        session.config_store.set("default_no_status", True, session_only=True)
        self._two_pages(http, make_response, make_links)
        invoke_rest_method_multiple_result(session, "x")
        assert RecordingProgress.instances == []

    def test_zero_threshold_disables(self, session, http, make_response, make_links):
        session.config_store.set("multi_request_progress_threshold", 0, session_only=True)
        self._two_pages(http, make_response, make_links)
        invoke_rest_method_multiple_result(session, "x")
        assert RecordingProgress.instances == []

    def test_stopped_when_a_page_fails(self, session, http, make_response, make_links):
        session.config_store.set("multi_request_progress_threshold", 2, session_only=True)
        http.add(
            make_response(200, [1], headers=make_links(f"{API}/x?page=2", f"{API}/x?page=2")),
            make_response(500, {"message": "Server Error"}),
        )
        with pytest.raises(GitHubApiError):
            invoke_rest_method_multiple_result(session, "x")
        [bar] = RecordingProgress.instances
        assert bar.stopped

"""
Unit tests for the provider adapters.

Provider HTTP traffic is served by httpx.MockTransport fixtures; no network.
"""

from datetime import datetime

import httpx
import pytest

from job_aggregator.config import Settings
from job_aggregator.models import JobRecord, SearchParams
from job_aggregator.sources import AdzunaSource, JSearchSource, RemotiveSource
from job_aggregator.sources.base import first_text


class TestFirstText:
    def test_skips_blank_values(self):
        assert first_text(None, "", "   ", "x") == "x"

    def test_numbers_become_strings(self):
        assert first_text(42) == "42"

    def test_nothing_usable(self):
        assert first_text(None, "", True) is None

    def test_returns_text_unchanged(self):
        assert first_text("  Senior Dev  ", "fallback") == "  Senior Dev  "


class TestJSearchSource:
    def test_maps_full_listing(self, settings, transport_factory, jsearch_payload):
        transport = transport_factory(jsearch_payload)
        result = JSearchSource(settings, transport).search(SearchParams(query="python", location="Austin"))

        assert result.source == "JSearch API"
        assert result.total_count == 57
        job = result.jobs[0]
        assert job.id == "js-1"
        assert job.title == "Senior Python Engineer"
        assert job.company == "Acme Corp"
        assert job.location == "Austin, TX"
        assert (job.salary.min, job.salary.max, job.salary.currency) == (120000, 160000, "USD")
        assert job.skills == ["Python", "Aws"]
        assert job.url == "https://acme.example/apply/1"
        assert job.posted_date == "2024-05-01T00:00:00.000Z"
        assert job.employment_type == "FULLTIME"
        assert job.source == "jsearch"

    def test_request_shape(self, settings, transport_factory, jsearch_payload):
        transport = transport_factory(jsearch_payload)
        JSearchSource(settings, transport).search(SearchParams(query="python", page=2, remote=True))

        request = transport.requests[0]
        assert request.url.host == "jsearch.p.rapidapi.com"
        assert request.url.params["query"] == "python in USA"
        assert request.url.params["page"] == "2"
        assert request.url.params["num_pages"] == "1"
        assert request.url.params["date_posted"] == "month"
        assert request.url.params["remote_jobs_only"] == "true"
        assert request.headers["X-RapidAPI-Key"] == "rapid-test"
        assert request.headers["X-RapidAPI-Host"] == "jsearch.p.rapidapi.com"

    def test_missing_fields_get_defaults(self, settings, transport_factory):
        transport = transport_factory({"data": [{"job_title": ""}]})
        result = JSearchSource(settings, transport).search(SearchParams(query="x"))

        job = result.jobs[0]
        assert job.title == "Unknown Title"
        assert job.company == "Unknown Company"
        assert job.location == "Remote"
        assert (job.salary.min, job.salary.max) == (None, None)
        assert job.url == "#"
        assert job.employment_type == "FULLTIME"
        assert job.id
        datetime.fromisoformat(job.posted_date)
        assert result.total_count == 1

    def test_location_falls_back_to_country(self, settings, transport_factory):
        transport = transport_factory({"data": [{"job_city": "Austin", "job_country": "US"}]})
        job = JSearchSource(settings, transport).search(SearchParams(query="x")).jobs[0]
        assert job.location == "US"

    def test_salary_parsed_from_text_when_no_bounds(self, settings, transport_factory):
        transport = transport_factory({"data": [{"job_id": "1", "job_salary": "100k-150k"}]})
        job = JSearchSource(settings, transport).search(SearchParams(query="x")).jobs[0]
        assert (job.salary.min, job.salary.max) == (100000, 150000)

    def test_google_link_used_without_apply_link(self, settings, transport_factory):
        transport = transport_factory({"data": [{"job_google_link": "https://g.example/1"}]})
        job = JSearchSource(settings, transport).search(SearchParams(query="x")).jobs[0]
        assert job.url == "https://g.example/1"

    def test_duplicate_ids_dropped(self, settings, transport_factory):
        payload = {"data": [{"job_id": "dup", "job_title": "A"}, {"job_id": "dup", "job_title": "B"}]}
        result = JSearchSource(settings, transport_factory(payload)).search(SearchParams(query="x"))
        assert [job.title for job in result.jobs] == ["A"]

    def test_no_key_skips_request(self, transport_factory, jsearch_payload):
        transport = transport_factory(jsearch_payload)
        result = JSearchSource(Settings(), transport).search(SearchParams(query="x"))

        assert result.jobs == []
        assert result.total_count == 0
        assert result.source == "jsearch (no key)"
        assert transport.requests == []

    def test_reads_key_from_environment(self, monkeypatch, transport_factory, jsearch_payload):
        monkeypatch.setenv("RAPIDAPI_KEY", "from-env")
        transport = transport_factory(jsearch_payload)
        result = JSearchSource(transport=transport).search(SearchParams(query="x"))

        assert result.source == "JSearch API"
        assert transport.requests[0].headers["X-RapidAPI-Key"] == "from-env"

    def test_http_error_becomes_empty_result(self, settings, transport_factory):
        transport = transport_factory({"message": "quota"}, status_code=429)
        result = JSearchSource(settings, transport).search(SearchParams(query="x"))
        assert result.jobs == []
        assert result.source == "jsearch (error)"

    def test_transport_error_becomes_empty_result(self, settings, transport_factory):
        transport = transport_factory(exc=httpx.ConnectError("connection refused"))
        result = JSearchSource(settings, transport).search(SearchParams(query="x"))
        assert result.source == "jsearch (error)"

    def test_malformed_payload_becomes_empty_result(self, settings, transport_factory):
        transport = transport_factory({"data": "not-a-list"})
        result = JSearchSource(settings, transport).search(SearchParams(query="x"))
        assert result.source == "jsearch (error)"

    def test_round_trip_preserves_fields(self, settings, transport_factory, jsearch_payload):
        job = JSearchSource(settings, transport_factory(jsearch_payload)).search(SearchParams(query="x")).jobs[0]
        assert JobRecord.model_validate(job.model_dump(by_alias=True)) == job

    def test_padded_values_kept_verbatim(self, settings, transport_factory):
        payload = {"data": [{"job_id": " js-1 ", "job_title": "  Senior Dev  ", "employer_name": "Acme\n"}]}
        job = JSearchSource(settings, transport_factory(payload)).search(SearchParams(query="x")).jobs[0]

        assert job.id == " js-1 "
        assert job.title == "  Senior Dev  "
        assert job.company == "Acme\n"


class TestAdzunaSource:
    def test_maps_full_listing(self, settings, transport_factory, adzuna_payload):
        result = AdzunaSource(settings, transport_factory(adzuna_payload)).search(SearchParams(query="data"))

        assert result.source == "Adzuna API"
        assert result.total_count == 1234
        job = result.jobs[0]
        assert job.id == "4321"
        assert job.company == "Globex"
        assert job.location == "Denver, Colorado"
        assert (job.salary.min, job.salary.max, job.salary.currency) == (90000, 110000, "USD")
        assert job.skills == ["Python", "Airflow"]
        assert job.url == "https://adzuna.example/4321"
        assert job.posted_date == "2024-04-20T10:00:00Z"
        assert job.employment_type == "contract"
        assert job.source == "adzuna"

    def test_round_trip_preserves_fields(self, settings, transport_factory, adzuna_payload):
        job = AdzunaSource(settings, transport_factory(adzuna_payload)).search(SearchParams(query="x")).jobs[0]
        assert JobRecord.model_validate(job.model_dump(by_alias=True)) == job

    def test_request_shape(self, settings, transport_factory, adzuna_payload):
        transport = transport_factory(adzuna_payload)
        AdzunaSource(settings, transport).search(SearchParams(query="data engineer", location="Denver", page=2))

        request = transport.requests[0]
        assert request.url.path == "/v1/api/jobs/us/search/2"
        assert request.url.params["app_id"] == "app-test"
        assert request.url.params["app_key"] == "key-test"
        assert request.url.params["what"] == "data engineer"
        assert request.url.params["where"] == "Denver"
        assert request.url.params["results_per_page"] == "20"

    def test_missing_fields_get_defaults(self, settings, transport_factory):
        result = AdzunaSource(settings, transport_factory({"results": [{"id": 7}]})).search(SearchParams(query="x"))

        job = result.jobs[0]
        assert job.id == "7"
        assert job.title == "Unknown Title"
        assert job.company == "Unknown Company"
        assert job.location == "Unknown Location"
        assert (job.salary.min, job.salary.max) == (None, None)
        assert job.employment_type == "permanent"
        assert job.url == "#"

    @pytest.mark.parametrize("creds", [{}, {"ADZUNA_APP_ID": "only-id"}, {"ADZUNA_API_KEY": "only-key"}])
    def test_needs_both_credentials(self, creds, transport_factory, adzuna_payload):
        transport = transport_factory(adzuna_payload)
        result = AdzunaSource(Settings(**creds), transport).search(SearchParams(query="x"))

        assert result.source == "adzuna (no key)"
        assert transport.requests == []

    def test_error_becomes_empty_result(self, settings, transport_factory):
        result = AdzunaSource(settings, transport_factory({}, status_code=500)).search(SearchParams(query="x"))
        assert result.jobs == []
        assert result.source == "adzuna (error)"


class TestRemotiveSource:
    def test_filters_on_title_description_and_tags(self, transport_factory, remotive_payload):
        result = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query="Python"))

        assert [job.id for job in result.jobs] == ["1", "3", "4"]
        assert result.total_count == 3
        assert result.source == "Remotive API (Free)"

    def test_request_is_unfiltered(self, transport_factory, remotive_payload):
        transport = transport_factory(remotive_payload)
        RemotiveSource(transport=transport).search(SearchParams(query="python"))

        request = transport.requests[0]
        assert request.url.host == "remotive.com"
        assert request.url.params["limit"] == "50"
        assert "search" not in request.url.params

    def test_maps_full_listing(self, transport_factory, remotive_payload):
        job = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query="python")).jobs[0]

        assert job.id == "1"
        assert job.title == "Python Developer"
        assert job.company == "Initech"
        assert job.location == "Europe"
        assert job.description == "Build APIs"
        assert (job.salary.min, job.salary.max, job.salary.currency) == (80000, 100000, "USD")
        assert job.skills == ["python", "django"]
        assert job.url == "https://remotive.example/1"
        assert job.posted_date == "2024-05-02T08:00:00"
        assert job.employment_type == "full_time"
        assert job.source == "remotive"

    def test_round_trip_preserves_fields(self, transport_factory, remotive_payload):
        jobs = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query="python")).jobs
        for job in jobs:
            assert JobRecord.model_validate(job.model_dump(by_alias=True)) == job

    def test_skills_extracted_when_no_tags(self, transport_factory, remotive_payload):
        jobs = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query="python")).jobs
        assert jobs[1].skills == ["Python"]

    def test_missing_fields_get_defaults(self, transport_factory, remotive_payload):
        jobs = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query="python")).jobs
        job = jobs[1]
        assert job.location == "Remote"
        assert (job.salary.min, job.salary.max) == (None, None)
        assert job.employment_type == "full_time"

    def test_empty_query_keeps_everything(self, transport_factory, remotive_payload):
        result = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query=""))
        assert len(result.jobs) == 4

    def test_caps_results(self, transport_factory):
        payload = {"jobs": [{"id": i, "title": f"Python role {i}"} for i in range(45)]}
        result = RemotiveSource(transport=transport_factory(payload)).search(SearchParams(query="python"))
        assert len(result.jobs) == 30

    def test_no_match_is_empty_but_not_error(self, transport_factory, remotive_payload):
        result = RemotiveSource(transport=transport_factory(remotive_payload)).search(SearchParams(query="cobol"))
        assert result.jobs == []
        assert result.source == "Remotive API (Free)"

    def test_error_becomes_empty_result(self, transport_factory):
        result = RemotiveSource(transport=transport_factory(exc=httpx.ReadTimeout("slow"))).search(
            SearchParams(query="x")
        )
        assert result.source == "remotive (error)"

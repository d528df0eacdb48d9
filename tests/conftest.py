"""
Shared fixtures.

Every test runs with provider and LLM credentials cleared and from an empty
working directory, so neither the real environment nor a local `.env` leaks in.
"""

import httpx
import pytest

from job_aggregator.config import Settings

CREDENTIAL_VARS = ["RAPIDAPI_KEY", "ADZUNA_APP_ID", "ADZUNA_API_KEY", "ADZUNA_COUNTRY", "LLM_API_KEY"]


@pytest.fixture(autouse=True)
def isolate_environment(monkeypatch, tmp_path):
    for var in CREDENTIAL_VARS:
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)


@pytest.fixture
def settings():
    """Settings with every provider configured."""
    return Settings(RAPIDAPI_KEY="rapid-test", ADZUNA_APP_ID="app-test", ADZUNA_API_KEY="key-test")


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps the requests it served."""

    def __init__(self, payload=None, status_code=200, exc=None):
        self.requests = []

        def handler(request):
            self.requests.append(request)
            if exc is not None:
                raise exc
            return httpx.Response(status_code, json=payload)

        super().__init__(handler)


@pytest.fixture
def transport_factory():
    return RecordingTransport


@pytest.fixture
def jsearch_payload():
    return {
        "status": "OK",
        "count": 57,
        "data": [
            {
                "job_id": "js-1",
                "job_title": "Senior Python Engineer",
                "employer_name": "Acme Corp",
                "job_city": "Austin",
                "job_state": "TX",
                "job_country": "US",
                "job_min_salary": 120000,
                "job_max_salary": 160000,
                "job_salary_currency": "USD",
                "job_description": "Python and AWS",
                "job_apply_link": "https://acme.example/apply/1",
                "job_google_link": "https://google.example/1",
                "job_posted_at_datetime_utc": "2024-05-01T00:00:00.000Z",
                "job_employment_type": "FULLTIME",
            }
        ],
    }


@pytest.fixture
def adzuna_payload():
    return {
        "count": 1234,
        "results": [
            {
                "id": "4321",
                "title": "Data Engineer",
                "company": {"display_name": "Globex"},
                "location": {"display_name": "Denver, Colorado"},
                "salary_min": 90000,
                "salary_max": 110000,
                "description": "Airflow pipelines in Python",
                "redirect_url": "https://adzuna.example/4321",
                "created": "2024-04-20T10:00:00Z",
                "contract_type": "contract",
            }
        ],
    }


@pytest.fixture
def remotive_payload():
    return {
        "job-count": 4,
        "jobs": [
            {
                "id": 1,
                "title": "Python Developer",
                "company_name": "Initech",
                "candidate_required_location": "Europe",
                "salary": "$80k - $100k",
                "description": "Build APIs",
                "tags": ["python", "django"],
                "url": "https://remotive.example/1",
                "publication_date": "2024-05-02T08:00:00",
                "job_type": "full_time",
            },
            {
                "id": 2,
                "title": "Product Designer",
                "company_name": "Hooli",
                "description": "Figma all day",
                "tags": ["ui"],
                "url": "https://remotive.example/2",
            },
            {
                "id": 3,
                "title": "Backend Engineer",
                "company_name": "Umbrella",
                "description": "We love PYTHON",
                "tags": [],
                "url": "https://remotive.example/3",
            },
            {
                "id": 4,
                "title": "Ops Engineer",
                "company_name": "Vandelay",
                "description": "",
                "tags": ["Python-scripting"],
                "url": "https://remotive.example/4",
            },
        ],
    }

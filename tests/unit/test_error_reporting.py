"""Unit tests for the Sentry event scrubbing hooks."""

from app.main import scrub_breadcrumb, scrub_event


def httpx_breadcrumb(url: str, query: str) -> dict:
    # Shape recorded by sentry_sdk's httpx integration
    return {
        "type": "http",
        "category": "httplib",
        "data": {"url": url, "method": "POST", "http.query": query, "status_code": 200},
    }


GEMINI_URL = "https://generativelanguage.googleapis.com/v1beta/models/gemini-2.0-flash:generateContent"


class TestScrubBreadcrumb:
    """Tests for scrub_breadcrumb."""

    def test_removes_key_from_query(self) -> None:
        crumb = scrub_breadcrumb(httpx_breadcrumb(GEMINI_URL, "alt=json&key=AIzaSECRET"), {})

        assert "AIzaSECRET" not in crumb["data"]["http.query"]
        assert crumb["data"]["http.query"] == "alt=json"

    def test_removes_key_from_url(self) -> None:
        crumb = scrub_breadcrumb(httpx_breadcrumb(f"{GEMINI_URL}?key=AIzaSECRET&alt=json", ""), {})

        assert "AIzaSECRET" not in crumb["data"]["url"]
        assert "alt=json" in crumb["data"]["url"]

    def test_leaves_other_breadcrumbs_alone(self) -> None:
        crumb = {"category": "log", "message": "Sending gemini request"}
        assert scrub_breadcrumb(dict(crumb), {}) == crumb


class TestScrubEvent:
    """Tests for scrub_event on error events and transactions."""

    def test_error_event_breadcrumbs(self) -> None:
        event = {
            "message": "Recipe generation fell back to placeholder: upstream_status",
            "breadcrumbs": {"values": [httpx_breadcrumb(GEMINI_URL, "key=AIzaSECRET")]},
        }

        scrubbed = scrub_event(event, {})

        assert "AIzaSECRET" not in str(scrubbed)

    def test_transaction_span_data(self) -> None:
        event = {
            "type": "transaction",
            "spans": [
                {"op": "http.client", "data": {"url": GEMINI_URL, "http.query": "key=AIzaSECRET"}},
                {"op": "db", "description": "no data"},
            ],
        }

        scrubbed = scrub_event(event, {})

        assert "AIzaSECRET" not in str(scrubbed)
        assert scrubbed["spans"][0]["data"]["url"] == GEMINI_URL

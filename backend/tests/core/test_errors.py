"""Error Hierarchy — tests for codes, statuses and the REST envelope."""

from rankings.core.errors import (
    DatabaseError,
    ErrorCategory,
    ErrorContext,
    ExternalServiceError,
    InvalidRankingUpdateError,
    RankingsError,
    ResourceNotFoundError,
)


def test_not_found_is_404_with_resource_in_message():
    err = ResourceNotFoundError("Contest", "c-9")
    assert err.http_status == 404
    assert err.code == "RESOURCE_NOT_FOUND"
    assert "c-9" in err.message


def test_database_error_is_critical_503():
    err = DatabaseError("boom", "put")
    assert err.http_status == 503
    assert err.category == ErrorCategory.DATABASE
    assert err.operation == "put"


def test_all_errors_share_base():
    for err in (
        DatabaseError("x", "get"),
        ExternalServiceError("x", "athlete-contests"),
        InvalidRankingUpdateError("x"),
        ResourceNotFoundError("Athlete", "a"),
    ):
        assert isinstance(err, RankingsError)


def test_to_response_carries_context():
    ctx = ErrorContext(athlete_id="a-1", discipline="downhill", year=2024)
    body = InvalidRankingUpdateError("nope", ctx).to_response()
    assert body["error"]["code"] == "INVALID_RANKING_UPDATE"
    assert body["error"]["category"] == "validation"
    assert body["error"]["context"]["athlete_id"] == "a-1"
    assert body["error"]["context"]["year"] == 2024


def test_log_extra_drops_unknown_bucket_fields():
    err = ResourceNotFoundError(
        "Contest", "c-9", ErrorContext(athlete_id="a-1", discipline="slalom"),
    )
    assert err.log_extra() == {
        "error_code": "RESOURCE_NOT_FOUND",
        "athlete_id": "a-1",
        "discipline": "slalom",
    }


def test_status_is_fixed_per_class():
    assert InvalidRankingUpdateError.http_status == 400
    assert ExternalServiceError("x", "athlete-contests").http_status == 503

"""Error Hierarchy — envelope shape and http status per error type."""

from attune.core.errors import (
    AttuneError, DatabaseError, DeviceCommandTimeoutError, ErrorCategory,
    ErrorContext, FeatureDisabledError, ResourceNotFoundError,
)


def test_to_response_envelope():
    err = ResourceNotFoundError(
        "Policy", "p-1", ErrorContext(user_id="u-1", policy_id="p-1"),
    )
    body = err.to_response()["error"]
    assert body["code"] == "RESOURCE_NOT_FOUND"
    assert body["message"] == "Policy 'p-1' not found"
    assert body["category"] == "resource_not_found"
    assert body["context"]["policy_id"] == "p-1"
    assert err.http_status == 404


def test_feature_disabled_is_404():
    err = FeatureDisabledError("environmental_orchestrator")
    assert err.http_status == 404
    assert err.code == "FEATURE_DISABLED"


def test_timeout_error_category():
    err = DeviceCommandTimeoutError(200)
    assert err.category is ErrorCategory.TIMEOUT
    assert "200ms" in err.message
    assert isinstance(err, AttuneError)


def test_database_error_is_503():
    assert DatabaseError("boom", "commit").http_status == 503

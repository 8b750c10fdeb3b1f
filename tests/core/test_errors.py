"""Error Hierarchy — tags, annotation trail and the response envelope."""

import pytest

from foopoc.core.errors import (
    BadRequestError, ConfigError, ErrorCategory, FooPocError, NotFoundError,
    StoreError, VerificationError, UnauthorizedError, format_tag,
)


def test_format_tag():
    assert format_tag("H1LS2G", "Getting foos in handler.") == (
        "Error H1LS2G - Getting foos in handler."
    )


def test_annotate_returns_same_instance():
    err = StoreError("Querying foos from db", "R1QF7A")
    assert err.annotate("S1LS4F", "Getting foos.") is err


def test_trail_order_and_outer_tag():
    err = NotFoundError("foo", 9, "R5NF0E")
    err.annotate("S4UP5F", "Updating foo.").annotate("H4UP3U", "Updating foo in handler.")

    assert err.trail == [
        "Error R5NF0E - No foo found with id 9",
        "Error S4UP5F - Updating foo.",
        "Error H4UP3U - Updating foo in handler.",
    ]
    assert err.outer_tag == "Error H4UP3U - Updating foo in handler."
    assert str(err).startswith("Error H4UP3U")
    assert str(err).endswith("No foo found with id 9")


def test_trail_is_a_copy():
    err = BadRequestError("Parsing body.", "H2BD6C")
    err.trail.append("tampered")
    assert len(err.trail) == 1


def test_annotated_error_still_matches_its_type():
    with pytest.raises(NotFoundError):
        try:
            raise NotFoundError("foo", 1, "R5NF0E")
        except FooPocError as exc:
            raise exc.annotate("S4UP5F", "Updating foo.")


@pytest.mark.parametrize("err, status", [
    (BadRequestError("m", "AAAAAA"), 400),
    (VerificationError("m", "AAAAAA"), 401),
    (NotFoundError("foo", 1, "AAAAAA"), 404),
    (StoreError("m", "AAAAAA"), 500),
    (ConfigError(["oidc_client_id"]), 500),
])
def test_http_status(err, status):
    assert err.http_status == status


def test_verification_error_is_unauthorized():
    assert issubclass(VerificationError, UnauthorizedError)


def test_to_response_exposes_only_outer_tag():
    err = VerificationError("Assertion rejected: bad audience", "V3CL8M")
    err.annotate("G2VF4T", "Verifying token.")

    body = err.to_response()

    assert body["message"] == "Error G2VF4T - Verifying token."
    assert body["code"] == "V3CL8M"
    assert body["category"] == ErrorCategory.AUTHENTICATION.value
    assert "audience" not in str(body)
    assert "timestamp" in body


def test_config_error_lists_fields():
    err = ConfigError(["oidc_client_id", "redirect_uri"])
    assert err.fields == ["oidc_client_id", "redirect_uri"]
    assert "redirect_uri" in err.message
    assert err.code == "CF9R2Q"

import pytest

from shortlyx.core.exceptions import (
    ConstraintViolation,
    InvalidCredentials,
    NotAuthenticated,
    NotFound,
    PermissionDenied,
    ShortlyXError,
    StorageFailure,
    UploadFailed,
    ValidationFailed,
)


class TestCustomExceptions:
    """Test error taxonomy classes."""

    def test_constraint_violation(self):
        """Test ConstraintViolation creation and properties."""
        error = ConstraintViolation("Username already exists", field="username")
        assert str(error) == "Username already exists"
        assert error.status_code == 409
        assert error.error_code == "ALREADY_EXISTS"
        assert error.details == {"field": "username"}

    def test_invalid_credentials(self):
        error = InvalidCredentials()
        assert error.message == "Invalid username or password"
        assert error.status_code == 401

    def test_not_authenticated(self):
        assert NotAuthenticated().status_code == 401

    def test_permission_denied(self):
        assert PermissionDenied().status_code == 403

    def test_upload_failed_detail(self):
        error = UploadFailed("Upload preset not found", detail='{"error": {}}')
        assert error.status_code == 502
        assert error.details == {"detail": '{"error": {}}'}
        assert UploadFailed("boom").details == {}

    def test_not_found(self):
        assert NotFound("Video not found").status_code == 404

    def test_validation_failed(self):
        error = ValidationFailed("caption", "Please add a caption for your video")
        assert error.status_code == 400
        assert error.error_code == "VALIDATION_ERROR"
        assert error.details == {"field": "caption"}

    def test_storage_failure_hides_cause(self):
        error = StorageFailure("Video.update")
        assert error.status_code == 500
        assert error.message == "Something went wrong, please try again"
        assert error.details == {"operation": "Video.update"}

    @pytest.mark.parametrize(
        "error",
        [ConstraintViolation(), InvalidCredentials(), NotFound(), ValidationFailed("f", "bad")],
    )
    def test_all_inherit_base(self, error):
        assert isinstance(error, ShortlyXError)


class TestConversion:
    def test_to_dict_is_the_response_body(self):
        assert NotFound("Video not found").to_dict() == {
            "error_code": "NOT_FOUND",
            "message": "Video not found",
            "details": {},
        }
        assert ValidationFailed("caption", "Required").to_dict()["details"] == {"field": "caption"}

"""
Test Error Definitions
"""

from storefront.core.errors import PersistenceError, StorefrontError


def test_persistence_error_defaults():
    error = PersistenceError()

    assert isinstance(error, StorefrontError)
    assert error.code == "persistence_error"
    assert error.original is None
    assert str(error) == "Persistence operation failed"


def test_to_dict_includes_details_when_present():
    error = PersistenceError("create failed", details={"entity": "User"})

    assert error.to_dict() == {
        "error": {
            "message": "create failed",
            "code": "persistence_error",
            "details": {"entity": "User"},
        }
    }


def test_to_dict_without_details():
    assert "details" not in StorefrontError("boom").to_dict()["error"]

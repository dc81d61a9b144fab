"""Tests for the game error hierarchy."""

from stellar_nexus.domain.errors import (
    AlreadyInGuildError,
    GameError,
    InsufficientCreditsError,
    InsufficientMaterialsError,
    InsufficientResourceError,
    NoActiveShipError,
    NotFoundError,
    StateConflictError,
    TransientError,
)


def test_codes_derive_from_class_names():
    assert NotFoundError("ship", 4).code == "NOT_FOUND"
    assert InsufficientCreditsError(10, 5).code == "INSUFFICIENT_CREDITS"
    assert AlreadyInGuildError("already in a guild").code == "ALREADY_IN_GUILD"


def test_explicit_code_wins():
    error = StateConflictError("name taken", code="ALLIANCE_NAME_TAKEN")
    assert error.code == "ALLIANCE_NAME_TAKEN"


def test_insufficient_credits_message():
    error = InsufficientCreditsError(1000, 50)
    assert isinstance(error, InsufficientResourceError)
    assert error.message == "Insufficient credits: need 1,000, have 50"
    assert error.details == {"resource": "credits", "required": 1000, "current": 50}


def test_insufficient_materials_lists_every_shortfall():
    error = InsufficientMaterialsError({"Silicon": (4, 1), "Iron Ore": (5, 0)})
    assert error.message == (
        "Insufficient materials: Iron Ore (need 5, have 0), Silicon (need 4, have 1)"
    )
    assert error.details["missing"]["Silicon"] == {"required": 4, "current": 1}


def test_no_active_ship_is_not_found():
    error = NoActiveShipError(7)
    assert isinstance(error, NotFoundError)
    assert error.message == "user 7 has no active ship"


def test_only_transient_errors_are_retryable():
    assert TransientError("database busy").retryable is True
    assert GameError("boom").retryable is False


def test_str_and_to_dict():
    error = NotFoundError("guild", 3)
    assert str(error) == "[NOT_FOUND] guild 3 not found | {'entity': 'guild', 'identifier': 3}"
    assert error.to_dict() == {
        "error_type": "NotFoundError",
        "code": "NOT_FOUND",
        "message": "guild 3 not found",
        "details": {"entity": "guild", "identifier": 3},
        "retryable": False,
    }

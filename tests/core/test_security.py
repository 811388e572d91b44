import pytest

from eventops.core.security import (
    PASSWORD_SPECIAL_CHARS,
    hash_password,
    password_policy_errors,
    verify_password,
)


def test_strong_password_passes_every_rule():
    assert password_policy_errors("Correct-Horse-9-Battery") == []


@pytest.mark.parametrize("special", list(PASSWORD_SPECIAL_CHARS))
def test_each_listed_special_character_counts(special):
    assert password_policy_errors(f"Abcdefghij12{special}") == []


def test_failed_rules_are_listed_in_order():
    assert password_policy_errors("") == [
        "At least 12 characters",
        "At least 1 uppercase letter",
        "At least 1 lowercase letter",
        "At least 1 number",
        "At least 1 special character (!@#$%^&* etc.)",
    ]
    # Characters outside the listed set do not satisfy the special rule
    assert password_policy_errors("Abcdefghij12 é") == [
        "At least 1 special character (!@#$%^&* etc.)"
    ]


def test_hash_round_trip():
    hashed = hash_password("Correct-Horse-9-Battery", iterations=1000)

    assert hashed.startswith("pbkdf2_sha256$1000$")
    assert verify_password("Correct-Horse-9-Battery", hashed)
    assert not verify_password("correct-horse-9-battery", hashed)
    assert not verify_password("Correct-Horse-9-Battery", "bcrypt$whatever")

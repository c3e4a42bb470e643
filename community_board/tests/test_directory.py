import pytest

from community_board.errors import AuthError, ConflictError, ValidationError


def test_register_returns_user_without_hash(services):
    user = services.directory.register("  Carol ", "Carol@Example.com", "secret-pass")

    assert user.id > 0
    assert user.name == "Carol"
    assert user.email == "carol@example.com"
    assert "password" not in str(user.to_dict()).lower()
    assert user.password_hash != "secret-pass"
    assert user.password_hash.startswith("$argon2")


@pytest.mark.parametrize(
    "name, email, password, message",
    [
        ("", "a@x.com", "pw", "Name is required"),
        ("   ", "a@x.com", "pw", "Name is required"),
        ("A", "", "pw", "Email is required"),
        ("A", "a@x.com", "", "Password is required"),
        ("A", "a@x.com", "   ", "Password is required"),
        (None, None, None, "Name is required"),
    ],
)
def test_register_missing_fields(services, name, email, password, message):
    with pytest.raises(ValidationError) as exc:
        services.directory.register(name, email, password)
    assert exc.value.message == message


def test_register_duplicate_email_is_case_insensitive(services):
    services.directory.register("A", "A@x.com", "pw")

    with pytest.raises(ConflictError):
        services.directory.register("Other", "a@x.com", "pw2")


def test_authenticate_success(services, alice):
    assert services.directory.authenticate("ALICE@example.com", "password123") == alice


def test_authenticate_errors_have_the_same_shape(services, alice):
    with pytest.raises(AuthError) as wrong_password:
        services.directory.authenticate("alice@example.com", "nope")
    with pytest.raises(AuthError) as unknown_email:
        services.directory.authenticate("nobody@example.com", "password123")

    assert wrong_password.value.message == unknown_email.value.message == "Invalid credentials"


def test_get_user(services, alice):
    assert services.directory.get(alice.id) == alice
    assert services.directory.get(9999) is None


def test_register_rejects_non_string_name(services):
    with pytest.raises(ValidationError) as exc:
        services.directory.register(123, "a@x.com", "pw")
    assert exc.value.message == "Name must be a string"


def test_authenticate_non_string_credentials(services, alice):
    with pytest.raises(AuthError) as exc:
        services.directory.authenticate("alice@example.com", 12345)
    assert exc.value.message == "Invalid credentials"

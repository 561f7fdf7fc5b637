import pytest

from auth import generate_token
from errors import AuthenticationError, InvalidInputError

REGISTRATION = {
    "full_name": "Asha Rao",
    "email": "asha@example.com",
    "age": 30,
    "password": "secret123",
}


class TestAuthService:
    """Tests for AuthService."""

    def test_register_returns_user_and_token(self, services):
        user, token = services.auth.register(dict(REGISTRATION))

        assert user.email == "asha@example.com"
        assert user.password_hash != "secret123"
        assert services.auth.authenticate(token) == user.id

    def test_register_duplicate_email(self, services):
        services.auth.register(dict(REGISTRATION))

        with pytest.raises(InvalidInputError) as exc_info:
            services.auth.register(dict(REGISTRATION, email="ASHA@example.com"))

        assert exc_info.value.message == "User with this email already exists"
        assert exc_info.value.status_code == 400

    @pytest.mark.parametrize(
        "field,value",
        [
            ("full_name", "A"),
            ("email", "not-an-email"),
            ("age", 12),
            ("age", 121),
            ("password", "123"),
        ],
    )
    def test_register_validation(self, services, field, value):
        with pytest.raises(InvalidInputError) as exc_info:
            services.auth.register(dict(REGISTRATION, **{field: value}))

        assert exc_info.value.details[0]["loc"] == (field,)

    @pytest.mark.parametrize("password", ["x" * 73, "é" * 37])
    def test_register_rejects_password_longer_than_bcrypt_limit(
        self, services, password
    ):
        with pytest.raises(InvalidInputError) as exc_info:
            services.auth.register(dict(REGISTRATION, password=password))

        assert exc_info.value.status_code == 400
        assert exc_info.value.details[0]["loc"] == ("password",)
        assert services.users.find_by_email("asha@example.com") is None

    def test_register_accepts_password_at_bcrypt_limit(self, services):
        user, token = services.auth.register(dict(REGISTRATION, password="x" * 72))

        assert services.auth.login("asha@example.com", "x" * 72)[0].id == user.id

    def test_login(self, services):
        registered, _ = services.auth.register(dict(REGISTRATION))

        user, token = services.auth.login("asha@example.com", "secret123")

        assert user.id == registered.id
        assert services.auth.authenticate(token) == user.id

    @pytest.mark.parametrize(
        "email,password",
        [("asha@example.com", "wrong-pass"), ("nobody@example.com", "secret123")],
    )
    def test_login_rejects_bad_credentials(self, services, email, password):
        services.auth.register(dict(REGISTRATION))

        with pytest.raises(AuthenticationError) as exc_info:
            services.auth.login(email, password)

        assert exc_info.value.message == "Invalid email or password"
        assert exc_info.value.status_code == 401

    @pytest.mark.parametrize("token", [None, "", "garbage"])
    def test_authenticate_rejects_bad_tokens(self, services, token):
        with pytest.raises(AuthenticationError):
            services.auth.authenticate(token)

    def test_authenticate_rejects_unknown_user(self, services):
        token = generate_token(999, "test-secret")

        with pytest.raises(AuthenticationError):
            services.auth.authenticate(token)

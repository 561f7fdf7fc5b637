"""Registration, login and token checks."""

from typing import Optional, Tuple

from auth import generate_token, hash_password, verify_password, verify_token
from errors import AuthenticationError, InvalidInputError
from logger import get_logger
from models.schemas import LoginRequest, RegisterRequest, parse_request
from models.user import User

logger = get_logger()


class AuthService:
    """Issues and checks credentials for users.

    Args:
        users: UserService used to look up and create users.
        secret: Token signing secret.
        ttl_days: Token lifetime in days.
    """

    def __init__(self, users, secret: str, ttl_days: int = 7):
        self.users = users
        self.secret = secret
        self.ttl_days = ttl_days

    def register(self, data: dict) -> Tuple[User, str]:
        """Create an account and return it with a fresh token.

        Raises:
            InvalidInputError: If validation fails or the email is taken.
        """
        request = parse_request(RegisterRequest, data)

        if self.users.find_by_email(request.email):
            raise InvalidInputError("User with this email already exists")

        user = self.users.create(
            full_name=request.full_name,
            email=request.email,
            age=request.age,
            password_hash=hash_password(request.password),
        )
        logger.info(f"Registered user {user.id}")

        return user, generate_token(user.id, self.secret, self.ttl_days)

    def login(self, email: str, password: str) -> Tuple[User, str]:
        """Check credentials and return the user with a fresh token.

        Raises:
            InvalidInputError: If the input is malformed.
            AuthenticationError: If the email or password is wrong.
        """
        request = parse_request(LoginRequest, {"email": email, "password": password})

        user = self.users.find_by_email(request.email)
        if user is None or not verify_password(request.password, user.password_hash):
            raise AuthenticationError("Invalid email or password")

        return user, generate_token(user.id, self.secret, self.ttl_days)

    def authenticate(self, token: Optional[str]) -> int:
        """Resolve a token to a user id.

        Raises:
            AuthenticationError: If the token is missing, invalid, expired or
                refers to a user that no longer exists.
        """
        if not token:
            raise AuthenticationError("Unauthorized")

        user_id = verify_token(token, self.secret)
        if user_id is None or self.users.find(user_id) is None:
            raise AuthenticationError("Unauthorized")

        return user_id

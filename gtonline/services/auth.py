import logging

from gtonline.core.config import Settings
from gtonline.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password
)
from gtonline.repositories.base import UserStore
from gtonline.repositories.errors import DuplicateRecord, RecordNotFound
from gtonline.schemas.auth import LoginRequest, RegisterRequest, RegisterResponse, Token
from gtonline.schemas.user import CurrentUser, UserRecord
from gtonline.utils.exceptions import AlreadyExistsError, AuthenticationError, InternalError

logger = logging.getLogger(__name__)

LOGIN_FAILED = "Email or password do not matched."
INVALID_TOKEN = "Invalid access token"


class AuthService:
    def __init__(self, store: UserStore, settings: Settings):
        self.store = store
        self.settings = settings

    async def register(self, user_data: RegisterRequest) -> RegisterResponse:
        """Register a new user"""
        email = str(user_data.email)

        # Check if user already exists
        try:
            await self.store.find_user_by_email(email)
        except RecordNotFound:
            pass
        except Exception as e:
            raise InternalError(cause=e)
        else:
            raise AlreadyExistsError(f"Email {email} already registered.")

        user = UserRecord(
            email=email,
            password=get_password_hash(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name
        )
        try:
            await self.store.create_user(user)
        except DuplicateRecord as e:
            raise AlreadyExistsError(f"Email {email} already registered.", cause=e)
        except Exception as e:
            raise InternalError(cause=e)

        logger.info("User registered", extra={"email": email})
        return RegisterResponse(email=email, token=self.create_token(email))

    async def login(self, login_data: LoginRequest) -> Token:
        """Login with email and password"""
        email = str(login_data.email)
        try:
            user = await self.store.find_user_by_email(email)
        except RecordNotFound as e:
            raise AuthenticationError(LOGIN_FAILED, cause=e)
        except Exception as e:
            raise InternalError(cause=e)

        if not verify_password(login_data.password, user.password):
            raise AuthenticationError(LOGIN_FAILED)

        return self.create_token(user.email)

    def authenticate(self, token_type: str, access_token: str) -> CurrentUser:
        """Resolve a bearer token to the calling user"""
        if token_type.lower() != "bearer":
            raise AuthenticationError(INVALID_TOKEN)

        email = decode_access_token(access_token, self.settings)
        if not email:
            raise AuthenticationError(INVALID_TOKEN)

        return CurrentUser(email=email)

    def create_token(self, email: str) -> Token:
        """Create access token for user"""
        return Token(
            access_token=create_access_token(email, self.settings),
            token_type="Bearer"
        )

# classstore/services/auth_service.py
import uuid

from passlib.context import CryptContext

from classstore.data.models.admin import AdminModel
from classstore.repos.base import AdminStore
from classstore.utils.logging import get_logger

logger = get_logger(__name__)

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


class AuthService:
    """Credential check for the admin panel. Session handling lives in the API layer."""

    def __init__(self, admin_store: AdminStore):
        self.repo = admin_store

    @staticmethod
    def hash_password(password: str) -> str:
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(password: str, hashed: str) -> bool:
        try:
            return pwd_context.verify(password, hashed)
        except ValueError:
            # unknown / malformed hash
            return False

    def authenticate(self, username: str, password: str) -> AdminModel | None:
        admin = self.repo.get_admin_by_username(username)
        if not admin:
            logger.info(f"Admin login failed: unknown user '{username}'")
            return None

        if not self.verify_password(password, admin.password):
            logger.info(f"Admin login failed: bad password for '{username}'")
            return None

        logger.info(f"Admin '{username}' authenticated")
        return admin

    def get_admin(self, admin_id: str) -> AdminModel | None:
        return self.repo.get_admin(admin_id)

    def ensure_admin(self, username: str, password: str) -> AdminModel:
        """Creates the bootstrap admin account if it does not exist yet."""
        existing = self.repo.get_admin_by_username(username)
        if existing:
            return existing

        admin = AdminModel(
            id=str(uuid.uuid4()),
            username=username,
            password=self.hash_password(password),
        )
        created = self.repo.create_admin(admin)
        logger.info(f"Created admin account '{username}'")
        return created

from sqlalchemy import select
from sqlalchemy.orm import Session
from classstore.data.models.admin import AdminModel

class AdminRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_admin(self, admin_id: str) -> AdminModel | None:
        return self.db.get(AdminModel, admin_id)

    def get_admin_by_username(self, username: str) -> AdminModel | None:
        return self.db.execute(
            select(AdminModel).where(AdminModel.username == username)
        ).scalar_one_or_none()

    def create_admin(self, admin: AdminModel) -> AdminModel:
        self.db.add(admin)
        self.db.commit()
        self.db.refresh(admin)
        return admin

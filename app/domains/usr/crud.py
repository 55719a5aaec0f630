# app/domains/usr/crud.py

"""
'usr' 도메인의 CRUD 작업을 담당하는 모듈입니다.
"""

from typing import Optional
from sqlmodel.ext.asyncio.session import AsyncSession
from fastapi import HTTPException, status

from app.core.crud_base import CRUDBase
from app.core.security import get_password_hash, verify_password
from . import models as usr_models
from . import schemas as usr_schemas


# =============================================================================
# 1. usr.admins 테이블 CRUD
# =============================================================================
class CRUDAdmin(CRUDBase[usr_models.Admin, usr_schemas.AdminCreate, usr_schemas.AdminUpdate]):
    def __init__(self):
        super().__init__(model=usr_models.Admin)

    async def get_by_username(self, db: AsyncSession, *, username: str) -> Optional[usr_models.Admin]:
        return await self.get_by_attribute(db, attribute="username", value=username)

    async def create(self, db: AsyncSession, *, obj_in: usr_schemas.AdminCreate) -> usr_models.Admin:
        """새로운 관리자를 생성하며 비밀번호를 해싱하고 사용자명 중복을 검사합니다."""
        if await self.get_by_username(db, username=obj_in.username):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already registered")

        admin_data = obj_in.model_dump(exclude={"password"})
        db_admin = usr_models.Admin(**admin_data, password_hash=get_password_hash(obj_in.password))

        db.add(db_admin)
        await db.commit()
        await db.refresh(db_admin)
        return db_admin

    async def update(
        self, db: AsyncSession, *, db_obj: usr_models.Admin, obj_in: usr_schemas.AdminUpdate
    ) -> usr_models.Admin:
        """비밀번호가 포함되면 해시로 바꿔 저장합니다."""
        update_data = obj_in.model_dump(exclude_unset=True)
        password = update_data.pop("password", None)
        if password:
            update_data["password_hash"] = get_password_hash(password)
        return await super().update(db, db_obj=db_obj, obj_in=update_data)

    async def authenticate(self, db: AsyncSession, *, username: str, password: str) -> Optional[usr_models.Admin]:
        """사용자명과 비밀번호로 관리자를 인증합니다."""
        admin = await self.get_by_username(db, username=username)
        if not admin:
            return None
        if not verify_password(password, admin.password_hash):
            return None
        return admin

    async def remove(self, db: AsyncSession, *, id: int) -> usr_models.Admin:
        admin_to_delete = await self.get(db, id=id)
        if not admin_to_delete:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Admin not found")
        return await super().delete(db, id=id)


admin = CRUDAdmin()

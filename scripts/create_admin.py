# flake8: noqa
# scripts/create_admin.py

import asyncio
from typing import Optional

import typer
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import sessionmaker

from app.core.config import settings
from app.core.database import create_db_and_tables, engine
from app.domains.rgn.directory import RegionDirectory
from app.domains.usr import crud as usr_crud
from app.domains.usr import schemas as usr_schemas
from app.domains.usr import services as usr_services
from app.domains.usr.models import AdminLevel, UserType

cli = typer.Typer()


async def create_admin_user(db: AsyncSession, admin_in: usr_schemas.AdminCreate) -> None:
    """
    데이터베이스에 관리자 계정을 생성하는 비동기 함수
    """
    if await usr_crud.admin.get_by_username(db, username=admin_in.username):
        typer.echo(f"오류: 이미 존재하는 사용자명입니다: {admin_in.username}")
        return

    await usr_crud.admin.create(db, obj_in=admin_in)
    typer.echo(f"관리자 계정이 성공적으로 생성되었습니다: {admin_in.username}")


@cli.command()
def main(
    username: str = typer.Option(
        ..., '--username', '-u',
        prompt="관리자 사용자명(ID)을 입력하세요",
        help="로그인 시 사용할 사용자명(ID)입니다."
    ),
    password: str = typer.Option(
        ..., '--password', '-p',
        prompt="관리자 비밀번호를 입력하세요",
        hide_input=True,
        confirmation_prompt=True,
        help="최소 8자 이상"
    ),
    super_admin: bool = typer.Option(
        False, '--super',
        help="전체 구역 권한을 가진 최고 관리자로 생성합니다."
    ),
    admin_level: int = typer.Option(
        AdminLevel.NONE, '--level', '-l',
        help="관할 단계 (1 성, 2 시, 3 구). --super 와 함께 쓰지 않습니다."
    ),
    province: Optional[str] = typer.Option(None, '--province', help="관할 성 이름"),
    city: Optional[str] = typer.Option(None, '--city', help="관할 시 이름"),
    district: Optional[str] = typer.Option(None, '--district', help="관할 구 이름"),
    init_db: bool = typer.Option(False, "--init-db", help="usr 스키마와 테이블을 먼저 생성합니다. (개발용)"),
):
    """
    SCMS 관리자 계정을 생성합니다. 관할 구역 이름은 번들된 행정구역 데이터로 검증합니다.
    """
    if len(password) < 8:
        typer.echo("오류: 비밀번호는 최소 8자 이상이어야 합니다.")
        raise typer.Abort()

    if not super_admin:
        if admin_level not in (AdminLevel.PROVINCE, AdminLevel.CITY, AdminLevel.DISTRICT):
            typer.echo("오류: 관할 단계는 1, 2, 3 중 하나여야 합니다.")
            raise typer.Abort()
        directory = RegionDirectory.from_file(settings.REGION_DATA_FILE, skip_empty_provinces=settings.skip_empty_provinces)
        try:
            code = usr_services.validate_admin_scope(
                directory, UserType.ADMIN, admin_level, province, city, district
            )
        except usr_services.AdminScopeError as e:
            typer.echo(f"오류: 관할 구역 이름이 관할 단계까지 해석되지 않습니다. ({e})")
            raise typer.Abort()
        typer.echo(f"관할 구역: {directory.find_label_by_code(code)} ({code})")

    admin_in = usr_schemas.AdminCreate(
        username=username,
        password=password,
        user_type=usr_services.legacy_user_type_for(super_admin),
        admin_level=AdminLevel.NONE if super_admin else admin_level,
        province=province,
        city=city,
        district=district,
    )

    AsyncSessionLocal = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def run_creation():
        if init_db:
            await create_db_and_tables()
        async with AsyncSessionLocal() as db:
            await create_admin_user(db=db, admin_in=admin_in)
        await engine.dispose()

    asyncio.run(run_creation())


if __name__ == "__main__":
    cli()

# flake8: noqa
# scripts/region_codes.py

"""
번들된 행정구역 데이터를 점검하는 CLI 입니다. (DB 불필요)

    python scripts/region_codes.py tree --depth 2
    python scripts/region_codes.py resolve 江苏省 常州市 新北区
    python scripts/region_codes.py check 030403 --level city --code 030400
"""

from typing import Optional

import typer

from app.core.config import settings
from app.domains.rgn.directory import RegionDirectory
from app.domains.rgn.models import ScopeDescriptor, ScopeLevel
from app.domains.rgn.tree import iter_nodes

cli = typer.Typer()


def _load_directory(path: Optional[str]) -> RegionDirectory:
    return RegionDirectory.from_file(path or settings.REGION_DATA_FILE, skip_empty_provinces=settings.skip_empty_provinces)


@cli.command()
def tree(
    depth: int = typer.Option(3, '--depth', '-d', min=1, max=3, help="출력할 최대 단계"),
    source: Optional[str] = typer.Option(None, '--source', help="원천 JSON 경로 (기본: 설정값)"),
):
    """코드와 함께 트리를 출력합니다."""
    directory = _load_directory(source)
    for node in iter_nodes(directory.full_tree()):
        if node.level <= depth:
            typer.echo(f"{'  ' * (node.level - 1)}{node.code} {node.label}")
    typer.echo(f"total nodes: {directory.node_count}")


@cli.command()
def resolve(
    province: str,
    city: str = typer.Argument(""),
    district: str = typer.Argument(""),
    source: Optional[str] = typer.Option(None, '--source'),
):
    """성/시/구 이름을 지역 코드로 변환합니다."""
    directory = _load_directory(source)
    code = directory.resolve_code(province, city, district)
    typer.echo(f"{code} {directory.find_label_by_code(code)}")


@cli.command()
def check(
    target: str,
    level: ScopeLevel = typer.Option(..., '--level'),
    code: str = typer.Option("", '--code'),
    source: Optional[str] = typer.Option(None, '--source'),
):
    """대상 코드가 주어진 권한 범위 안에 있는지 판정합니다."""
    directory = _load_directory(source)
    within = directory.is_within_scope(target, ScopeDescriptor(level=level, code=code))
    typer.echo("within scope" if within else "out of scope")
    if not within:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    cli()

#!/usr/bin/env python
"""从远程数据源拉取一次 API 目录并打印统计。

用法:
    uv run python scripts/sync_catalog.py [--url <catalog_url>] [--top 10]
"""

import argparse
import asyncio
import sys
from pathlib import Path


def _ensure_project_root_on_path() -> None:
    """确保项目根目录在 Python 路径中，便于直接运行脚本。"""
    project_root = Path(__file__).parent.parent
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_path()


async def sync_catalog(catalog_url: str | None = None, top: int = 10) -> int:
    """拉取目录并输出分类统计。

    Returns:
        进程退出码（0 成功，1 失败）
    """
    from src.core.infrastructure.logging import setup_logging
    from src.modules.catalog.application.sync_service import CatalogSyncService
    from src.modules.catalog.infrastructure.catalog_provider import HttpCatalogProvider
    from src.modules.catalog.infrastructure.repositories import (
        InMemoryCatalogSnapshotRepository,
    )

    setup_logging()

    repository = InMemoryCatalogSnapshotRepository()
    provider = HttpCatalogProvider(catalog_url=catalog_url)
    outcome = await CatalogSyncService(repository, provider).sync(force=True)

    print(outcome.message)
    if not outcome.success:
        return 1

    catalog = repository.get().catalog
    print(f"Declared total: {catalog.declared_total}")
    largest = sorted(
        catalog.categories.items(), key=lambda item: len(item[1].entries), reverse=True
    )
    for name, data in largest[:top]:
        print(f"  {name}: {len(data.entries)}")
    return 0


def main():
    parser = argparse.ArgumentParser(description="同步 API 目录")
    parser.add_argument(
        "--url",
        type=str,
        default=None,
        help="目录地址（默认使用 CATALOG_URL 配置）",
    )
    parser.add_argument(
        "--top",
        type=int,
        default=10,
        help="输出条目最多的前 N 个分类（默认 10）",
    )

    args = parser.parse_args()
    sys.exit(asyncio.run(sync_catalog(args.url, args.top)))


if __name__ == "__main__":
    main()

#!/usr/bin/env python
"""对实时目录调用一个工具并打印文本结果。

用法:
    uv run python scripts/call_tool.py search_apis_by_keyword --args '{"keyword": "weather"}'
    uv run python scripts/call_tool.py --list
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path


def _ensure_project_root_on_path() -> None:
    """确保项目根目录在 Python 路径中，便于直接运行脚本。"""
    project_root = Path(__file__).parent.parent
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_path()


def _build_registry():
    from src.modules.catalog.application.codegen_service import CodeGenerationService
    from src.modules.catalog.application.query_service import CatalogQueryService
    from src.modules.catalog.application.recommendation_service import (
        RecommendationService,
    )
    from src.modules.catalog.application.sync_service import CatalogSyncService
    from src.modules.catalog.infrastructure.catalog_provider import HttpCatalogProvider
    from src.modules.catalog.infrastructure.repositories import (
        InMemoryCatalogSnapshotRepository,
    )
    from src.modules.tools.application.tools import create_default_registry

    repository = InMemoryCatalogSnapshotRepository()
    query_service = CatalogQueryService(repository)
    return create_default_registry(
        query_service=query_service,
        recommendation_service=RecommendationService(repository),
        codegen_service=CodeGenerationService(query_service),
        sync_service=CatalogSyncService(repository, HttpCatalogProvider()),
    )


async def call_tool(name: str, arguments: dict) -> int:
    """调用工具并打印结果。

    Returns:
        进程退出码
    """
    from src.core.domain.exceptions import DomainException
    from src.core.infrastructure.logging import setup_logging

    setup_logging()
    registry = _build_registry()

    try:
        result = await registry.call(name, arguments)
    except DomainException as e:
        print(f"[{e.error_code} {e.rpc_code}] {e.message}", file=sys.stderr)
        return 2

    print(result.text)
    return 1 if result.is_error else 0


def main():
    parser = argparse.ArgumentParser(description="调用 API 目录工具")
    parser.add_argument("name", nargs="?", help="工具名称")
    parser.add_argument(
        "--args",
        type=str,
        default="{}",
        help="JSON 格式的工具参数（默认 {}）",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="列出所有工具",
    )

    args = parser.parse_args()

    if args.list:
        for definition in _build_registry().definitions():
            print(f"{definition['name']}: {definition['description']}")
        return
    if not args.name:
        parser.error("tool name is required unless --list is given")

    try:
        arguments = json.loads(args.args)
    except json.JSONDecodeError as e:
        parser.error(f"--args is not valid JSON: {e}")
    if not isinstance(arguments, dict):
        parser.error("--args must be a JSON object")

    sys.exit(asyncio.run(call_tool(args.name, arguments)))


if __name__ == "__main__":
    main()

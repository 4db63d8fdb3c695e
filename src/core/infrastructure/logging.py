"""Logging configuration with structlog integration.

提供两种日志记录方式：
1. loguru: 用于一般调试日志
2. structlog: 用于关键业务事件的结构化日志（目录同步、工具调用）
"""

import sys
from typing import Any

import structlog
from loguru import logger

from src.core.config import settings


def setup_logging() -> None:
    """Configure application logging with structlog and loguru."""
    _configure_structlog()
    _configure_loguru()

    logger.info(f"Logging configured with level: {settings.LOG_LEVEL}")


def _configure_structlog() -> None:
    """配置 structlog 处理器链。"""
    if settings.ENVIRONMENT == "local":
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    else:
        renderer = structlog.processors.JSONRenderer()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.CallsiteParameterAdder(
                [
                    structlog.processors.CallsiteParameter.MODULE,
                    structlog.processors.CallsiteParameter.FUNC_NAME,
                    structlog.processors.CallsiteParameter.LINENO,
                ]
            ),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            _get_log_level_number(settings.LOG_LEVEL)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def _configure_loguru() -> None:
    """配置 loguru。"""
    logger.remove()

    logger.add(
        sys.stderr,
        level=settings.LOG_LEVEL,
        format=(
            "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | "
            "<level>{level: <8}</level> | "
            "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
            "<level>{message}</level>"
        ),
        colorize=True,
    )

    if settings.ENVIRONMENT != "local":
        logger.add(
            "logs/apiscout_{time:YYYY-MM-DD}.log",
            rotation="00:00",
            retention="30 days",
            level="INFO",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
        )


def _get_log_level_number(level: str) -> int:
    """将日志级别字符串转换为数字。"""
    levels = {
        "DEBUG": 10,
        "INFO": 20,
        "WARNING": 30,
        "ERROR": 40,
        "CRITICAL": 50,
    }
    return levels.get(level.upper(), 20)


# ============================================================================
# 业务事件日志记录器
# ============================================================================


class BusinessEvents:
    """业务事件日志助手类。

    Usage:
        from src.core.infrastructure.logging import BusinessEvents

        BusinessEvents.catalog_sync_completed(categories=51, entries=1400, forced=False)
        BusinessEvents.tool_called(tool_name="search_apis_by_keyword", latency_ms=3)
    """

    _log = structlog.get_logger("business.events")

    @classmethod
    def catalog_sync_completed(
        cls,
        categories: int,
        entries: int,
        forced: bool,
        **extra: Any,
    ) -> None:
        """记录目录同步成功事件。"""
        cls._log.info(
            "catalog_sync_completed",
            event_type="sync",
            categories=categories,
            entries=entries,
            forced=forced,
            **extra,
        )

    @classmethod
    def catalog_sync_skipped(
        cls,
        age_sec: float,
        freshness_sec: int,
        **extra: Any,
    ) -> None:
        """记录因数据仍新鲜而跳过同步的事件。"""
        cls._log.info(
            "catalog_sync_skipped",
            event_type="sync",
            age_sec=round(age_sec, 1),
            freshness_sec=freshness_sec,
            **extra,
        )

    @classmethod
    def catalog_sync_failed(
        cls,
        url: str,
        error: str,
        **extra: Any,
    ) -> None:
        """记录目录同步失败事件。"""
        cls._log.warning(
            "catalog_sync_failed",
            event_type="sync_error",
            url=url,
            error=error,
            **extra,
        )

    @classmethod
    def tool_called(
        cls,
        tool_name: str,
        latency_ms: int,
        success: bool = True,
        **extra: Any,
    ) -> None:
        """记录工具调用事件。"""
        level = "info" if success else "warning"
        getattr(cls._log, level)(
            "tool_called",
            event_type="tool",
            tool_name=tool_name,
            latency_ms=latency_ms,
            success=success,
            **extra,
        )

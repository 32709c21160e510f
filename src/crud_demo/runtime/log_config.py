import logging
import sys
from pathlib import Path

from loguru import logger

from src.crud_demo.runtime.context import get_config


class InterceptHandler(logging.Handler):
    """Redirect standard 'logging' records (SQLAlchemy, PyMySQL) to Loguru."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = logger.level(record.levelname).name
        except ValueError:
            level = record.levelno

        # depth=2: stdlib -> this handler -> caller
        logger.opt(depth=2, exception=record.exc_info).bind(
            logger_name=record.name
        ).log(level, record.getMessage())


def configure_logging(level: str | None = None) -> None:
    """Install the Loguru sinks described by the current logging config.

    Args:
        level: Overrides ``logging.level`` from the config when given.
    """
    main_config = get_config()
    cfg = main_config.logging
    env = main_config.app.environment
    level = (level or cfg.level).upper()

    logger.remove()

    fmt_plain = (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    )
    backtrace_on = env != "production"

    logger.add(
        sys.stderr,
        level=level,
        format=fmt_plain,
        colorize=True,
        backtrace=backtrace_on,
        diagnose=backtrace_on,
    )

    if cfg.file:
        path = Path(cfg.file)
        path.parent.mkdir(parents=True, exist_ok=True)
        is_json_file = cfg.format == "json"
        logger.add(
            str(path),
            level=level,
            format="{message}" if is_json_file else fmt_plain,
            serialize=is_json_file,
            rotation=f"{cfg.max_size_mb} MB",
            retention=cfg.backup_count,
            compression="zip",
            backtrace=backtrace_on,
            diagnose=backtrace_on,
        )

    # level=0 lets every stdlib record reach the interceptor
    logging.basicConfig(handlers=[InterceptHandler()], level=0, force=True)

    # Route every existing stdlib logger through the root interceptor only
    for name in list(logging.root.manager.loggerDict.keys()):
        stdlog = logging.getLogger(name)
        stdlog.handlers = []
        stdlog.propagate = True

    sql_level = logging.INFO if cfg.echo_sql else logging.WARNING
    logging.getLogger("sqlalchemy.engine").setLevel(sql_level)
    logging.getLogger("sqlalchemy.pool").setLevel(logging.WARNING)

    logger.debug(
        "Logging configured: level={}, file={}, environment={}", level, cfg.file, env
    )

# SPDX-License-Identifier: Apache-2.0
#
# Copyright (c) 2025-2026 AudioXRef Contributors
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""
日志系统配置

提供集中式日志设置，支持文件轮转和控制台输出。
"""

import logging
import os
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config.app_config import get_app_dir
from config.constants import LOG_FILE_BACKUP_COUNT, LOG_FILE_MAX_BYTES

ROOT_LOGGER_NAME = "audioxref"

# 日志级别映射
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def setup_logging(
    log_dir: str = None,
    level: str = None,
    console_output: bool = True,
    file_output: bool = True,
) -> logging.Logger:
    """
    设置应用日志系统

    配置文件轮转处理器和控制台处理器。

    Args:
        log_dir: 日志文件目录，默认为 ~/.audioxref/logs
        level: 日志级别，默认根据环境变量 AUDIOXREF_ENV 决定
               (development: DEBUG, production: INFO)
        console_output: 是否输出到控制台，默认 True
        file_output: 是否写入日志文件，默认 True

    Returns:
        配置好的应用根日志器
    """
    if level is None:
        env = os.environ.get("AUDIOXREF_ENV", "production").lower()
        level = "DEBUG" if env == "development" else "INFO"

    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)  # 由处理器控制实际级别

    # 清除现有处理器，避免重复
    for handler in list(logger.handlers):
        handler.close()
    logger.handlers.clear()

    log_file = None
    if file_output:
        if log_dir is None:
            log_dir = get_app_dir() / "logs"
        else:
            log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)

        # 文件处理器 - 详细日志，带轮转
        log_file = log_dir / "audioxref.log"
        file_handler = RotatingFileHandler(
            log_file, maxBytes=LOG_FILE_MAX_BYTES, backupCount=LOG_FILE_BACKUP_COUNT, encoding="utf-8"
        )
        file_handler.setLevel(log_level)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    # 控制台处理器 - 简化日志；stdout 留给报告输出
    if console_output:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(max(log_level, logging.WARNING) if file_output else log_level)
        console_formatter = logging.Formatter("%(levelname)s: %(message)s")
        console_handler.setFormatter(console_formatter)
        logger.addHandler(console_handler)

    if not logger.handlers:
        logger.addHandler(logging.NullHandler())

    logger.debug("Logging initialized")
    if log_file is not None:
        logger.debug(f"Log file: {log_file}")
    logger.debug(f"Log level: {level}")

    return logger


def get_logger(name: str) -> logging.Logger:
    """
    获取特定模块的日志器实例

    Args:
        name: 模块名称（通常使用 __name__）

    Returns:
        日志器实例

    Example:
        logger = get_logger(__name__)
        logger.info("This is an info message")
    """
    if name.startswith(f"{ROOT_LOGGER_NAME}."):
        return logging.getLogger(name)

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_level(level: str):
    """
    动态设置日志级别

    Args:
        level: 日志级别 (DEBUG/INFO/WARNING/ERROR/CRITICAL)
    """
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            handler.setLevel(log_level)

    logger.info(f"Log level changed to: {level}")


def get_log_file_path() -> Path:
    """
    获取当前日志文件路径

    Returns:
        日志文件路径
    """
    logger = logging.getLogger(ROOT_LOGGER_NAME)

    for handler in logger.handlers:
        if isinstance(handler, RotatingFileHandler):
            return Path(handler.baseFilename)

    # 未找到文件处理器时返回默认路径
    return get_app_dir() / "logs" / "audioxref.log"

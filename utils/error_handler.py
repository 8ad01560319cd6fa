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
统一错误处理器

提供统一的错误处理机制，将各种异常转换为用户友好的错误消息和建议。
"""

import json
import logging
import subprocess
from enum import Enum
from typing import Any, Dict, Optional

logger = logging.getLogger("audioxref.utils.error_handler")


class ErrorCategory(Enum):
    """错误类别"""

    VALIDATION = "validation"
    PLATFORM = "platform"
    ENUMERATION = "enumeration"
    CONFIGURATION = "configuration"
    UNKNOWN = "unknown"

    def get_display_name(self) -> str:
        """Return the English display name for the category."""
        display_names = {
            ErrorCategory.VALIDATION: "Validation",
            ErrorCategory.PLATFORM: "Platform",
            ErrorCategory.ENUMERATION: "Device Enumeration",
            ErrorCategory.CONFIGURATION: "Configuration",
            ErrorCategory.UNKNOWN: "Unknown",
        }
        return display_names.get(self, "Unknown")


# 自定义异常类
class AudioXRefError(Exception):
    """AudioXRef 基础异常类"""

    def __init__(self, message: str, category: ErrorCategory = ErrorCategory.UNKNOWN):
        super().__init__(message)
        self.category = category


class InvalidInputError(AudioXRefError):
    """输入不是合法的设备记录序列"""

    def __init__(self, message: str = None, argument: Optional[str] = None):
        if not message:
            message = "Input validation failed"
        super().__init__(message, ErrorCategory.VALIDATION)
        self.argument = argument


class UnsupportedPlatformError(AudioXRefError):
    """当前操作系统不支持原生设备枚举"""

    def __init__(self, system: str):
        super().__init__(
            f"Native audio device enumeration is not supported on: {system or 'unknown'}",
            ErrorCategory.PLATFORM,
        )
        self.system = system


class EnumerationError(AudioXRefError):
    """平台命令执行失败或输出无法解析"""

    def __init__(self, message: str = None, command: Optional[str] = None):
        if not message:
            message = "Device enumeration failed"
        super().__init__(message, ErrorCategory.ENUMERATION)
        self.command = command


class ErrorHandler:
    """统一错误处理器"""

    @staticmethod
    def handle_error(error: Exception, context: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        """
        统一错误处理

        Args:
            error: 异常对象
            context: 错误上下文信息（可选）

        Returns:
            包含错误信息的字典:
            {
                "user_message": "用户友好的错误消息",
                "technical_details": "技术细节（用于日志）",
                "suggested_action": "建议的解决方案",
                "retry_possible": True/False,
                "category": "错误类别"
            }
        """
        context = context or {}

        # 预期内的业务异常不记录堆栈
        logger.error(
            f"Error occurred: {type(error).__name__}: {str(error)}",
            exc_info=not isinstance(error, AudioXRefError),
            extra={"context": context},
        )

        # 自定义异常直接使用其消息
        if isinstance(error, AudioXRefError):
            return {
                "user_message": str(error),
                "technical_details": str(error),
                "suggested_action": ErrorHandler._get_suggested_action(error),
                "retry_possible": ErrorHandler._is_retryable_error(error),
                "category": error.category.value,
            }

        elif isinstance(error, FileNotFoundError):
            return {
                "user_message": "File not found",
                "technical_details": str(error),
                "suggested_action": "Check that the file path is correct",
                "retry_possible": False,
                "category": ErrorCategory.VALIDATION.value,
            }

        elif isinstance(error, json.JSONDecodeError):
            return {
                "user_message": "File is not valid JSON",
                "technical_details": str(error),
                "suggested_action": "Export the device list again as a JSON array",
                "retry_possible": False,
                "category": ErrorCategory.VALIDATION.value,
            }

        elif isinstance(error, subprocess.TimeoutExpired):
            return {
                "user_message": "Platform command timed out",
                "technical_details": str(error),
                "suggested_action": "Increase enumeration.command_timeout_seconds and retry",
                "retry_possible": True,
                "category": ErrorCategory.ENUMERATION.value,
            }

        elif isinstance(error, (ValueError, TypeError)):
            return {
                "user_message": "Invalid value",
                "technical_details": str(error),
                "suggested_action": "Check the configuration and input files",
                "retry_possible": False,
                "category": ErrorCategory.CONFIGURATION.value,
            }

        # 未知错误
        else:
            return {
                "user_message": "An unexpected error occurred",
                "technical_details": f"{type(error).__name__}: {str(error)}",
                "suggested_action": "See the log file for details",
                "retry_possible": False,
                "category": ErrorCategory.UNKNOWN.value,
            }

    @staticmethod
    def format_user_message(error_info: Dict[str, Any], include_action: bool = True) -> str:
        """
        格式化用户错误消息

        Args:
            error_info: handle_error 返回的错误信息字典
            include_action: 是否包含建议操作

        Returns:
            格式化的错误消息字符串
        """
        message = error_info["user_message"]

        if include_action and error_info.get("suggested_action"):
            message += f"\n{error_info['suggested_action']}"

        return message

    @staticmethod
    def _get_suggested_action(error: AudioXRefError) -> str:
        """Get suggested action for custom errors."""
        if isinstance(error, InvalidInputError):
            return "Pass lists of device records (JSON arrays of objects)"
        elif isinstance(error, UnsupportedPlatformError):
            return "Run on macOS, Windows or Linux, or pass --native with a saved device list"
        elif isinstance(error, EnumerationError):
            return "Check that the platform audio tools are installed and retry"
        else:
            return "See the log file for details"

    @staticmethod
    def _is_retryable_error(error: AudioXRefError) -> bool:
        """Only enumeration failures can succeed on a second attempt."""
        return isinstance(error, EnumerationError)

    @staticmethod
    def is_retryable(error_info: Dict[str, Any]) -> bool:
        """
        判断错误是否可重试

        Args:
            error_info: handle_error 返回的错误信息字典

        Returns:
            是否可重试
        """
        return error_info.get("retry_possible", False)

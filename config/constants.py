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
Application-wide constants for AudioXRef.

This module contains constants used across multiple modules to avoid
hardcoded values throughout the codebase.
"""

# ============================================================================
# Device Enumeration Constants
# ============================================================================

DEFAULT_COMMAND_TIMEOUT_SECONDS = 10
DIRECTION_INPUT = "input"
DIRECTION_OUTPUT = "output"
DIRECTION_ALL = "all"
VALID_DIRECTIONS = (DIRECTION_INPUT, DIRECTION_OUTPUT, DIRECTION_ALL)

# Fallback values used when a platform tool omits a field
UNKNOWN_MANUFACTURER = "Unknown"
UNKNOWN_DEVICE_ID = "unknown"

LINUX_BACKEND_ALSA = "alsa"
LINUX_BACKEND_PULSEAUDIO = "pulseaudio"
VALID_LINUX_BACKENDS = (LINUX_BACKEND_ALSA, LINUX_BACKEND_PULSEAUDIO)

# ============================================================================
# Matching Constants
# ============================================================================

# Browser device ids that alias another device instead of naming hardware
FOREIGN_DEFAULT_DEVICE_ID = "default"
FOREIGN_COMMUNICATIONS_DEVICE_ID = "communications"

DEFAULT_DEVICE_MATCH_SCORE = 98.0
POSITION_CORRELATION_SCORE = 20.0
MAX_MATCH_SCORE = 100.0

# ============================================================================
# Logging Constants
# ============================================================================

LOG_FILE_MAX_BYTES = 5 * 1024 * 1024  # 5 MB log file size
LOG_FILE_BACKUP_COUNT = 3  # Number of backup log files
VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# ============================================================================
# Report Rendering Constants
# ============================================================================

REPORT_SEPARATOR_LENGTH = 60  # characters for "=" * 60

# SPDX-FileCopyrightText: 2025-2026 Jiri Vyskocil <jiri@vyskocil.com>
#
# SPDX-License-Identifier: Apache-2.0

"""External process execution."""

from .runner import ProcessResult, ProcessRunner, ProcessStatus

__all__ = ["ProcessResult", "ProcessRunner", "ProcessStatus"]

# -*- coding: utf-8 -*-
"""
OCM API 错误类型
"""

from typing import Optional

# 可重试的 HTTP 状态码（限流、网关错误）
RETRYABLE_STATUS_CODES = (429, 502, 503, 504)


class OCMError(Exception):
    """OCM API 调用失败"""

    def __init__(
        self,
        message: str,
        status: Optional[int] = None,
        code: Optional[str] = None,
        reason: Optional[str] = None,
        operation_id: Optional[str] = None
    ):
        super().__init__(message)
        self.status = status                # HTTP 状态码，网络错误时为 None
        self.code = code                    # OCM 错误代码，如 "ACCT-MGMT-7"
        self.reason = reason                # OCM 返回的错误描述
        self.operation_id = operation_id    # OCM operation ID，用于排查

    @property
    def retryable(self) -> bool:
        """网络错误和限流/网关错误可重试"""
        return self.status is None or self.status in RETRYABLE_STATUS_CODES


class OCMTimeoutError(OCMError):
    """超过截止时间"""

    @property
    def retryable(self) -> bool:
        return False

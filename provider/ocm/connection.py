# -*- coding: utf-8 -*-
"""
OCM API 连接模块

功能：
- 发送带 Bearer Token 的 HTTPS GET 请求
- 解析 JSON 响应和 OCM 错误响应
- 对限流和网关错误进行指数退避重试
- 每个请求的超时时间不超过截止时间的剩余时间
"""

import http.client
import json
import logging
import socket
import time
import urllib.error
import urllib.parse
import urllib.request
from typing import Any, Dict, Optional

from provider.ocm.errors import OCMError, OCMTimeoutError
from retry.retry import retry_with_backoff

logger = logging.getLogger(__name__)

DEFAULT_URL = 'https://api.openshift.com'
USER_AGENT = 'ocm-quota-exporter/0.1.0'


class OCMConnection:
    """
    OCM API 连接

    功能：
    - 管理 API 地址、Token、超时和重试参数
    - 提供 get() 方法供各个资源客户端使用
    """

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_URL,
        timeout: float = 30.0,
        max_retries: int = 2,
        retry_interval: float = 1.0
    ):
        """
        初始化 OCM 连接

        Args:
            token: OCM 访问 Token
            url: API 地址（默认 https://api.openshift.com）
            timeout: 单个请求的超时时间（秒）
            max_retries: 可重试错误的最大重试次数
            retry_interval: 初始重试间隔（秒）
        """
        self.url = url.rstrip('/')
        self.timeout = timeout
        self.max_retries = max_retries
        self.retry_interval = retry_interval
        self._token = token
        logger.debug(f"OCM 连接初始化完成: url={self.url}, timeout={timeout}s, max_retries={max_retries}")

    def get(self, path: str, params: Optional[Dict[str, Any]] = None, deadline: Optional[float] = None) -> Dict[str, Any]:
        """
        发送 GET 请求（带重试）

        Args:
            path: API 路径，如 '/api/accounts_mgmt/v1/current_account'
            params: 查询参数
            deadline: 截止时间（time.monotonic() 绝对值）

        Returns:
            解析后的 JSON 对象

        Raises:
            OCMError: API 返回错误或网络错误
            OCMTimeoutError: 超过截止时间
        """
        return retry_with_backoff(
            lambda: self._send(path, params, deadline),
            max_retries=self.max_retries,
            initial_interval=self.retry_interval,
            retryable=lambda e: isinstance(e, OCMError) and e.retryable,
            deadline=deadline
        )

    def _send(self, path: str, params: Optional[Dict[str, Any]], deadline: Optional[float]) -> Dict[str, Any]:
        """发送单次 GET 请求"""
        url = self._build_url(path, params)
        timeout = self._request_timeout(deadline)

        request = urllib.request.Request(url, method='GET')
        request.add_header('Authorization', f'Bearer {self._token}')
        request.add_header('Accept', 'application/json')
        request.add_header('User-Agent', USER_AGENT)

        logger.debug(f"[ocm] GET {url} (timeout={timeout:.1f}s)")

        try:
            with urllib.request.urlopen(request, timeout=timeout) as response:
                raw = response.read()
        except urllib.error.HTTPError as e:
            raise self._http_error(e, path)
        except socket.timeout as e:
            raise OCMError(f"请求超时: GET {path}: {e}")
        except urllib.error.URLError as e:
            raise OCMError(f"网络错误: GET {path}: {e.reason}")
        except (OSError, http.client.HTTPException) as e:
            # 连接被重置、服务端提前断开、响应体不完整等，不会被包装成 URLError
            raise OCMError(f"网络错误: GET {path}: {e!r}")

        try:
            body = json.loads(raw.decode('utf-8')) if raw else {}
        except ValueError as e:
            raise OCMError(f"响应不是合法 JSON: GET {path}: {e}", status=200)

        if not isinstance(body, dict):
            raise OCMError(f"响应不是 JSON 对象: GET {path}: {type(body).__name__}", status=200)
        return body

    def _build_url(self, path: str, params: Optional[Dict[str, Any]]) -> str:
        url = self.url + path
        if params:
            query = {k: str(v).lower() if isinstance(v, bool) else v for k, v in params.items()}
            url += '?' + urllib.parse.urlencode(query)
        return url

    def _request_timeout(self, deadline: Optional[float]) -> float:
        """计算本次请求的超时时间（不超过截止时间的剩余时间）"""
        if deadline is None:
            return self.timeout
        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise OCMTimeoutError("已超过采集截止时间，放弃请求")
        return min(self.timeout, remaining)

    def _http_error(self, error: urllib.error.HTTPError, path: str) -> OCMError:
        """把 HTTPError 转换为 OCMError，尽量解析 OCM 错误体"""
        code = reason = operation_id = None
        try:
            payload = json.loads(error.read().decode('utf-8'))
            if isinstance(payload, dict):
                code = payload.get('code')
                reason = payload.get('reason')
                operation_id = payload.get('operation_id')
        except ValueError:
            # 错误体不是 JSON（例如网关返回的 HTML），只保留状态码
            pass

        message = f"OCM API 错误: GET {path}: status={error.code}"
        if code:
            message += f", code={code}"
        if reason:
            message += f", reason={reason}"
        if operation_id:
            message += f", operation_id={operation_id}"

        return OCMError(message, status=error.code, code=code, reason=reason, operation_id=operation_id)

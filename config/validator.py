# -*- coding: utf-8 -*-
"""
配置验证模块

功能：
- 验证配置的完整性和正确性
- 检查必填字段
- 验证字段格式和取值范围
"""

from typing import Optional, Tuple
from urllib.parse import urlparse

from config.loader import ExporterConfig


def validate_config(config: ExporterConfig) -> Tuple[bool, Optional[str]]:
    """
    验证配置对象

    Args:
        config: ExporterConfig 对象

    Returns:
        (is_valid, error_message) 元组
    """
    if not isinstance(config.token, str) or not config.token.strip():
        return False, "缺少 OCM Token: 请设置 OCM_TOKEN 环境变量或使用 --ocm-token-path"

    parsed = urlparse(config.url) if isinstance(config.url, str) else None
    if parsed is None or parsed.scheme not in ('http', 'https') or not parsed.netloc:
        return False, f"url 必须是 http/https 地址: {config.url!r}"

    if not isinstance(config.organization_id, str):
        return False, "organization_id 必须是字符串"

    if isinstance(config.port, bool) or not isinstance(config.port, int) or not 1 <= config.port <= 65535:
        return False, f"port 必须在 1-65535 之间: {config.port!r}"

    if isinstance(config.timeout, bool) or not isinstance(config.timeout, (int, float)) or config.timeout <= 0:
        return False, f"timeout 必须是正数: {config.timeout!r}"

    if isinstance(config.page_size, bool) or not isinstance(config.page_size, int) or config.page_size <= 0:
        return False, f"page_size 必须是正整数: {config.page_size!r}"

    if isinstance(config.max_retries, bool) or not isinstance(config.max_retries, int) or config.max_retries < 0:
        return False, f"max_retries 必须是非负整数: {config.max_retries!r}"

    if not isinstance(config.debug, bool):
        return False, "debug 必须是布尔值"

    return True, None

# -*- coding: utf-8 -*-
"""
重试模块

功能：
- 指数退避重试，支持截止时间
"""

from retry.retry import retry_with_backoff

__all__ = ['retry_with_backoff']

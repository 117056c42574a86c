# -*- coding: utf-8 -*-
"""
重试机制实现模块

功能：
- 指数退避重试
- 可配置重试次数和间隔
- 支持截止时间（deadline），等待时间不会超过剩余时间
"""

import time
import logging
from typing import Callable, Optional

logger = logging.getLogger(__name__)


def retry_with_backoff(
    func: Callable,
    max_retries: int = 3,
    initial_interval: float = 1.0,
    max_interval: float = 30.0,
    multiplier: float = 2.0,
    retryable: Optional[Callable[[Exception], bool]] = None,
    deadline: Optional[float] = None,
    sleep: Callable[[float], None] = time.sleep
):
    """
    使用指数退避执行重试

    Args:
        func: 要执行的函数（无参数）
        max_retries: 最大重试次数（不含第一次调用）
        initial_interval: 初始重试间隔（秒）
        max_interval: 最大重试间隔（秒）
        multiplier: 退避倍数
        retryable: 判断异常是否可重试的函数，默认所有异常都可重试
        deadline: 截止时间（time.monotonic() 绝对值），超过后不再重试
        sleep: 等待函数（测试时可替换）

    Returns:
        函数执行结果

    Raises:
        最后一次调用抛出的异常
    """
    interval = initial_interval
    attempt = 0

    while True:
        try:
            return func()
        except Exception as e:
            if attempt >= max_retries:
                raise
            if retryable is not None and not retryable(e):
                raise

            wait_time = min(interval, max_interval)
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= wait_time:
                    # 剩余时间不够再等一次，直接放弃
                    raise

            attempt += 1
            logger.warning(f"[retry] 调用失败，{wait_time:.1f} 秒后第 {attempt} 次重试: {e}")
            sleep(wait_time)
            interval *= multiplier

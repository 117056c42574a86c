# -*- coding: utf-8 -*-
"""
采集错误上报模块

功能：
- 定义 ErrorReporter 接口，由外部传入 Collector
- 默认实现写日志，并可选地累计错误计数指标
"""

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import Optional

from prometheus_client import CollectorRegistry, Counter

from provider.ocm.models import QuotaCost

logger = logging.getLogger(__name__)


class ErrorStage(Enum):
    """错误发生的阶段"""
    FETCH = "fetch"          # 获取配额成本列表失败
    CONSUMED = "consumed"    # 构建 consumed 样本失败
    ALLOWED = "allowed"      # 构建 allowed 样本失败


class ErrorReporter(ABC):
    """采集错误上报接口"""

    @abstractmethod
    def report(self, stage: ErrorStage, error: Exception, record: Optional[QuotaCost] = None):
        """
        上报一个采集错误

        Args:
            stage: 错误阶段
            error: 异常对象
            record: 相关的 QuotaCost 记录（fetch 阶段为 None）
        """
        pass


class LoggingErrorReporter(ErrorReporter):
    """
    日志错误上报

    功能：
    - 每个错误写一条 error 日志
    - 传入 registry 时，累计 ocm_quota_exporter_errors_total{stage}
    """

    def __init__(self, registry: Optional[CollectorRegistry] = None):
        self.errors_total = None
        if registry is not None:
            self.errors_total = Counter(
                'ocm_quota_exporter_errors_total',
                'Total number of quota cost collection errors',
                ['stage'],
                registry=registry
            )

    def report(self, stage: ErrorStage, error: Exception, record: Optional[QuotaCost] = None):
        if stage == ErrorStage.FETCH:
            logger.error(f"[quota cost] failed to retrieve quota costs: {error}")
        else:
            logger.error(
                f"[quota cost] failed to create {stage.value} metric: "
                f"organization_id={record.organization_id if record else ''}, "
                f"quota_id={record.quota_id if record else ''}: {error}"
            )

        if self.errors_total is not None:
            self.errors_total.labels(stage=stage.value).inc()

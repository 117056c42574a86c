# -*- coding: utf-8 -*-
"""
Prometheus Collector 实现模块

功能：
- 每次抓取时从 OCM 获取一次配额成本列表
- 每条记录生成 consumed / allowed 两个 gauge 样本
- 获取失败时返回空结果；单个样本失败只跳过该样本
- 不保存任何跨抓取的状态
"""

import time
import logging
from typing import Iterator, List, Optional

from prometheus_client import CollectorRegistry
from prometheus_client.core import GaugeMetricFamily

from collector.quota_sample import (
    MetricDescriptor, QuotaSample, SampleError, SampleType,
    build_sample, new_quota_cost_descriptor
)
from collector.reporter import ErrorReporter, ErrorStage, LoggingErrorReporter
from provider.interfaces import QuotaSourceClient

logger = logging.getLogger(__name__)

DEFAULT_SCRAPE_TIMEOUT = 30.0


class QuotaCostCollector:
    """
    配额成本收集器

    功能：
    - describe(): 返回唯一的 ocm_quota_cost 指标描述
    - collect(): 每次抓取重新获取并生成样本
    - iter_samples(): 逐个生成样本（流式，不预先缓存）
    """

    def __init__(
        self,
        quota_client: QuotaSourceClient,
        registry: Optional[CollectorRegistry] = None,
        reporter: Optional[ErrorReporter] = None,
        scrape_timeout: Optional[float] = DEFAULT_SCRAPE_TIMEOUT
    ):
        """
        初始化配额成本收集器

        Args:
            quota_client: 绑定到组织的 QuotaCost 客户端
            registry: 指标注册表（传入时自动注册）
            reporter: 错误上报（默认写日志）
            scrape_timeout: 单次抓取获取数据的截止时间（秒），None 表示不限制
        """
        self.quota_client = quota_client
        self.reporter = reporter or LoggingErrorReporter()
        self.scrape_timeout = scrape_timeout
        self.descriptor: MetricDescriptor = new_quota_cost_descriptor()

        if registry is not None:
            registry.register(self)

    def describe(self) -> List[GaugeMetricFamily]:
        """返回指标描述（不发起任何请求）"""
        return [self._new_family()]

    def collect(self) -> Iterator[GaugeMetricFamily]:
        """
        Prometheus 抓取入口

        所有样本放入同一个 ocm_quota_cost 指标族后返回
        """
        family = self._new_family()
        for sample in self.iter_samples():
            family.add_metric(list(sample.label_values), sample.value)
        yield family

    def iter_samples(self) -> Iterator[QuotaSample]:
        """
        获取配额成本列表并逐个生成样本

        Yields:
            QuotaSample，每条记录依次生成 consumed、allowed
        """
        deadline = None
        if self.scrape_timeout is not None:
            deadline = time.monotonic() + self.scrape_timeout

        try:
            # 转成列表，惰性序列在迭代时的异常也归为获取失败
            quota_costs = list(self.quota_client.list(fetch_related_resources=True, deadline=deadline))
            organization_id = self.quota_client.get_organization_id()
        except Exception as e:
            # 上游不可用时本次抓取返回空结果，不影响 exporter 进程
            self.reporter.report(ErrorStage.FETCH, e)
            return

        logger.debug(f"[quota cost] 组织 {organization_id} 获取到 {len(quota_costs)} 条配额成本记录")

        for quota_cost in quota_costs:
            for sample_type, stage, value in (
                (SampleType.CONSUMED, ErrorStage.CONSUMED, quota_cost.consumed),
                (SampleType.ALLOWED, ErrorStage.ALLOWED, quota_cost.allowed),
            ):
                try:
                    sample = build_sample(
                        self.descriptor,
                        value,
                        (quota_cost.organization_id, quota_cost.quota_id, sample_type.value)
                    )
                except SampleError as e:
                    self.reporter.report(stage, e, quota_cost)
                    continue
                yield sample

    def _new_family(self) -> GaugeMetricFamily:
        return GaugeMetricFamily(
            self.descriptor.name,
            self.descriptor.documentation,
            labels=list(self.descriptor.label_names)
        )

# -*- coding: utf-8 -*-
"""
Prometheus Collector 模块

功能：
- 实现 ocm_quota_cost 指标收集逻辑
- 每次抓取从 OCM 获取配额成本并转换为 gauge 样本
- 错误通过 ErrorReporter 上报
"""

from .collector import QuotaCostCollector
from .quota_sample import MetricDescriptor, QuotaSample, SampleError, SampleType
from .reporter import ErrorReporter, ErrorStage, LoggingErrorReporter

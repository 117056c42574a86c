# -*- coding: utf-8 -*-
"""
配额指标数据结构

功能：
- 定义指标描述（名称、帮助文本、标签）
- 定义单个指标样本
- 构建样本时检查标签和数值，失败抛出 SampleError
"""

from dataclasses import dataclass
from typing import Any, Sequence, Tuple
from enum import Enum

OCM_QUOTA_COST_METRIC_NAME = 'ocm_quota_cost'
OCM_QUOTA_COST_METRIC_DESCRIPTION = 'Openshift Cluster Manager Quota Costs'

LABEL_ORGANIZATION_ID = 'organization_id'
LABEL_QUOTA_ID = 'quota_id'
LABEL_TYPE = 'type'


class SampleType(Enum):
    """样本类型（type 标签的取值）"""
    CONSUMED = "consumed"   # 当前使用量
    ALLOWED = "allowed"     # 配额上限


class SampleError(ValueError):
    """样本构建失败（标签或数值不合法）"""


@dataclass(frozen=True)
class MetricDescriptor:
    """指标描述（进程生命周期内不变）"""
    name: str
    documentation: str
    label_names: Tuple[str, ...]


@dataclass(frozen=True)
class QuotaSample:
    """单个 gauge 样本"""
    descriptor: MetricDescriptor
    value: float
    label_values: Tuple[str, ...]

    @property
    def labels(self) -> dict:
        """标签名到标签值的映射"""
        return dict(zip(self.descriptor.label_names, self.label_values))


def new_quota_cost_descriptor() -> MetricDescriptor:
    """创建 ocm_quota_cost 指标描述"""
    return MetricDescriptor(
        name=OCM_QUOTA_COST_METRIC_NAME,
        documentation=OCM_QUOTA_COST_METRIC_DESCRIPTION,
        label_names=(LABEL_ORGANIZATION_ID, LABEL_QUOTA_ID, LABEL_TYPE)
    )


def build_sample(descriptor: MetricDescriptor, value: Any, label_values: Sequence[Any]) -> QuotaSample:
    """
    构建 gauge 样本

    Args:
        descriptor: 指标描述
        value: 样本值（需要能转换为 float）
        label_values: 标签值（数量和顺序与 descriptor.label_names 一致）

    Returns:
        QuotaSample 对象

    Raises:
        SampleError: 标签数量不匹配、标签值不是合法的 UTF-8 字符串、数值无法转换
    """
    if len(label_values) != len(descriptor.label_names):
        raise SampleError(
            f"{descriptor.name}: 标签数量不匹配，需要 {len(descriptor.label_names)} 个，实际 {len(label_values)} 个"
        )

    for name, label_value in zip(descriptor.label_names, label_values):
        if not isinstance(label_value, str):
            raise SampleError(f"{descriptor.name}: 标签 {name} 必须是字符串，实际为 {type(label_value).__name__}")
        try:
            label_value.encode('utf-8')
        except UnicodeEncodeError:
            raise SampleError(f"{descriptor.name}: 标签 {name} 不是合法的 UTF-8: {label_value!r}")

    # bool 是 int 的子类，但不是合法的数量值
    if isinstance(value, bool):
        raise SampleError(f"{descriptor.name}: 数值不能是布尔值: {value!r}")
    try:
        float_value = float(value)
    except (TypeError, ValueError):
        raise SampleError(f"{descriptor.name}: 数值无法转换为 float: {value!r}")

    return QuotaSample(descriptor=descriptor, value=float_value, label_values=tuple(label_values))

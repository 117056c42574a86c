# -*- coding: utf-8 -*-
"""
OCM 数据结构

功能：
- 定义 QuotaCost 记录
- 从 accounts_mgmt API 返回的 JSON 解析记录
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class QuotaCost:
    """单条配额成本记录（一个组织 + 一个配额类型）"""
    organization_id: str            # 组织 ID
    quota_id: str                   # 配额 ID，如 "cluster|byoc|moa|marketplace"
    consumed: Any = 0               # 当前使用量（上游原值，不在这里校验）
    allowed: Any = 0                # 配额上限（0 可能表示不限制，由上游定义）
    related_resources: List[Dict[str, Any]] = field(default_factory=list)  # 关联资源（fetchRelatedResources=true 时返回）

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'QuotaCost':
        """
        从 API 返回的 JSON 对象解析

        缺失字段使用零值（"" / 0），不抛出异常；
        字段值的合法性在生成指标时再检查。

        Args:
            data: QuotaCost JSON 对象

        Returns:
            QuotaCost 对象
        """
        return cls(
            organization_id=data.get('organization_id', ''),
            quota_id=data.get('quota_id', ''),
            consumed=data.get('consumed', 0),
            allowed=data.get('allowed', 0),
            related_resources=data.get('related_resources') or []
        )

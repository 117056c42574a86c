# -*- coding: utf-8 -*-
"""
Quota Source 接口定义

功能：
- 定义 QuotaSourceClient 接口
- Collector 只依赖接口，不关心传输、认证和分页
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from provider.ocm.models import QuotaCost


class QuotaSourceClient(ABC):
    """
    配额成本数据源接口

    功能：
    - 返回某个组织的全部 QuotaCost 记录（按上游顺序）
    - 失败时抛出异常（网络、认证、上游错误）
    """

    @abstractmethod
    def list(self, fetch_related_resources: bool = True, deadline: Optional[float] = None) -> List[QuotaCost]:
        """
        获取组织的配额成本列表

        Args:
            fetch_related_resources: 是否让上游返回关联资源信息
            deadline: 截止时间（time.monotonic() 绝对值），None 表示不限制

        Returns:
            QuotaCost 列表
        """
        pass

    @abstractmethod
    def get_organization_id(self) -> str:
        """
        获取绑定的组织 ID（用于日志和标识）

        Returns:
            组织 ID
        """
        pass

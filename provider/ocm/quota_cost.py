# -*- coding: utf-8 -*-
"""
OCM QuotaCost API 客户端模块

功能：
- 调用 /api/accounts_mgmt/v1/organizations/{id}/quota_cost
- 自动翻页，返回全部记录（任何一页失败都视为整体失败）
- 保持上游返回顺序
"""

import logging
from typing import List, Optional

from provider.interfaces import QuotaSourceClient
from provider.ocm.connection import OCMConnection
from provider.ocm.errors import OCMError
from provider.ocm.models import QuotaCost

logger = logging.getLogger(__name__)

QUOTA_COST_PATH = '/api/accounts_mgmt/v1/organizations/{organization_id}/quota_cost'

# 防止服务端分页异常时无限翻页
MAX_PAGES = 1000


class QuotaCostClient(QuotaSourceClient):
    """
    QuotaCost 客户端（绑定到一个组织）

    功能：
    - 列出组织的全部配额成本记录
    - 分页由客户端内部处理，调用方只看到完整列表
    """

    def __init__(
        self,
        connection: OCMConnection,
        organization_id: str,
        page_size: int = 100,
        max_pages: int = MAX_PAGES
    ):
        """
        初始化 QuotaCost 客户端

        Args:
            connection: OCM 连接
            organization_id: 组织 ID
            page_size: 每页记录数
            max_pages: 最大翻页数，超过视为获取失败
        """
        if not organization_id:
            raise ValueError("organization_id 不能为空")
        self.connection = connection
        self.organization_id = organization_id
        self.page_size = page_size
        self.max_pages = max_pages
        self.path = QUOTA_COST_PATH.format(organization_id=organization_id)

    def get_organization_id(self) -> str:
        return self.organization_id

    def list(self, fetch_related_resources: bool = True, deadline: Optional[float] = None) -> List[QuotaCost]:
        """
        获取组织的全部配额成本记录

        Args:
            fetch_related_resources: 是否返回关联资源
            deadline: 截止时间（time.monotonic() 绝对值）

        Returns:
            QuotaCost 列表（上游顺序）

        Raises:
            OCMError: 任何一页请求失败
        """
        quota_costs: List[QuotaCost] = []
        fetched = 0
        previous_items = None
        page = 1

        while True:
            if page > self.max_pages:
                raise OCMError(f"QuotaCost 分页超过 {self.max_pages} 页，放弃本次获取", status=200)

            params = {
                'fetchRelatedResources': fetch_related_resources,
                'page': page,
                'size': self.page_size
            }
            body = self.connection.get(self.path, params=params, deadline=deadline)

            items = body.get('items') or []
            if not isinstance(items, list):
                raise OCMError(f"QuotaCost 列表格式错误: items 不是数组 (page={page})", status=200)

            if not items:
                break
            # 服务端忽略 page 参数时会一直返回同一页
            if items == previous_items:
                if isinstance(body.get('total'), int):
                    raise OCMError(f"QuotaCost 第 {page} 页与上一页相同，但记录数未达到 total", status=200)
                logger.warning(f"[quota cost] 第 {page} 页与上一页相同，停止翻页")
                break
            previous_items = items

            for item in items:
                if isinstance(item, dict):
                    quota_costs.append(QuotaCost.from_dict(item))
                else:
                    logger.warning(f"[quota cost] 忽略非对象记录: page={page}, item={item!r}")

            fetched += len(items)
            total = body.get('total')
            logger.debug(f"[quota cost] page={page}, items={len(items)}, total={total}")

            # 有 total 时以 total 为准；没有 total 时翻到空页为止（服务端可能把 size 限制得比请求的小）
            if isinstance(total, int):
                if fetched >= total:
                    break
            elif page == 1:
                logger.warning("[quota cost] 响应中没有 total，翻页到空页为止")
            page += 1

        logger.debug(f"[quota cost] 组织 {self.organization_id} 共获取 {len(quota_costs)} 条记录")
        return quota_costs

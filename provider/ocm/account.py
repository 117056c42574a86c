# -*- coding: utf-8 -*-
"""
OCM 当前账号客户端

功能：
- 未指定组织 ID 时，从当前账号信息中获取所属组织
"""

import logging
from typing import Optional

from provider.ocm.connection import OCMConnection
from provider.ocm.errors import OCMError

logger = logging.getLogger(__name__)

CURRENT_ACCOUNT_PATH = '/api/accounts_mgmt/v1/current_account'


class AccountsClient:
    """当前账号信息客户端"""

    def __init__(self, connection: OCMConnection):
        self.connection = connection

    def current_organization_id(self) -> str:
        """
        获取当前账号所属的组织 ID

        Returns:
            组织 ID

        Raises:
            OCMError: 请求失败或账号没有组织信息
        """
        body = self.connection.get(CURRENT_ACCOUNT_PATH)
        organization = body.get('organization') or {}
        organization_id = organization.get('id') if isinstance(organization, dict) else None
        if not organization_id:
            raise OCMError(f"当前账号 {body.get('username', '')} 没有关联的组织")
        logger.info(f"当前账号所属组织: {organization_id}")
        return organization_id


def resolve_organization_id(organization_id: Optional[str], connection: OCMConnection) -> str:
    """
    解析组织 ID：已指定则直接使用，否则查询当前账号

    Args:
        organization_id: 命令行或配置文件指定的组织 ID（可为空）
        connection: OCM 连接

    Returns:
        组织 ID
    """
    if organization_id:
        return organization_id
    return AccountsClient(connection).current_organization_id()

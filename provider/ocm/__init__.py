# -*- coding: utf-8 -*-
"""
OCM Provider 模块

功能：
- 封装 OpenShift Cluster Manager accounts_mgmt API 调用
- 获取组织的配额成本列表（自动翻页）
- 解析当前账号所属的组织 ID
"""

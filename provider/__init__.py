# -*- coding: utf-8 -*-
"""
Provider 模块

功能：
- 定义 QuotaSourceClient 接口
- 提供 OCM 实现
"""

# -*- coding: utf-8 -*-
"""
配置模块

功能：
- 加载 exporter 配置（YAML 文件、环境变量、命令行参数）
- 验证配置字段
"""

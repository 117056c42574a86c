# -*- coding: utf-8 -*-
"""
Exporter 配置加载模块

功能：
- 从 YAML 文件加载 exporter 配置（可选）
- 读取环境变量 OCM_TOKEN 和 Token 文件
- 定义清晰的数据结构（ExporterConfig）
- 读取失败时给出明确错误
"""

import yaml
import os
from typing import Any, Dict, Optional
from dataclasses import dataclass, fields

ENV_OCM_TOKEN = 'OCM_TOKEN'

DEFAULT_URL = 'https://api.openshift.com'
DEFAULT_PORT = 9090


@dataclass
class ExporterConfig:
    """Exporter 配置的根数据结构"""
    url: str = DEFAULT_URL              # OCM API 地址
    token: str = ''                     # OCM Token（来自环境变量或 Token 文件）
    token_path: str = ''                # Token 文件路径
    organization_id: str = ''           # 组织 ID，为空时使用当前账号所属组织
    port: int = DEFAULT_PORT            # HTTP 监听端口
    debug: bool = False                 # 是否输出 DEBUG 日志
    timeout: float = 30.0               # 单次抓取获取数据的截止时间（秒）
    page_size: int = 100                # QuotaCost 分页大小
    max_retries: int = 2                # 限流/网关错误的最大重试次数


def load_exporter_config(
    config_path: Optional[str] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None
) -> ExporterConfig:
    """
    加载 exporter 配置

    优先级：默认值 < YAML 文件 < 环境变量 < 命令行参数（overrides）

    Args:
        config_path: YAML 配置文件路径（可选）
        overrides: 命令行参数，值为 None 的项忽略
        environ: 环境变量（默认 os.environ）

    Returns:
        ExporterConfig 对象

    Raises:
        FileNotFoundError: 配置文件或 Token 文件不存在
        yaml.YAMLError: YAML 解析错误
        ValueError: 配置格式错误
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}

    if config_path:
        values.update(_read_yaml(config_path))

    if environ.get(ENV_OCM_TOKEN):
        values['token'] = environ[ENV_OCM_TOKEN]

    for key, value in (overrides or {}).items():
        if value is not None:
            values[key] = value

    config = ExporterConfig(**values)

    # 指定了 Token 文件时，文件内容优先于环境变量
    if config.token_path:
        config.token = load_token(config.token_path)

    return config


def load_token(token_path: str) -> str:
    """
    读取 Token 文件

    Args:
        token_path: Token 文件路径

    Returns:
        Token 字符串（去掉首尾空白）

    Raises:
        FileNotFoundError: 文件不存在
        IOError: 文件无法读取
    """
    if not os.path.exists(token_path):
        raise FileNotFoundError(f"OCM Token 文件不存在: {token_path}")

    try:
        with open(token_path, 'r', encoding='utf-8') as f:
            return f.read().strip()
    except IOError as e:
        raise IOError(f"无法读取 OCM Token 文件 {token_path}: {e}")


def _read_yaml(config_path: str) -> Dict[str, Any]:
    """
    读取 YAML 配置文件并检查字段

    Args:
        config_path: 配置文件路径

    Returns:
        配置字典（只包含 ExporterConfig 中定义的字段）
    """
    if not os.path.exists(config_path):
        raise FileNotFoundError(f"配置文件不存在: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            content = f.read()
    except IOError as e:
        raise IOError(f"无法读取配置文件 {config_path}: {e}")

    try:
        data = yaml.safe_load(content)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(f"YAML 解析失败: {e}")

    if data is None:
        return {}

    if not isinstance(data, dict):
        raise ValueError("配置格式错误: 顶层必须是字典类型")

    # 兼容 ocm: {...} 的嵌套写法
    if 'ocm' in data:
        ocm_data = data.pop('ocm')
        if not isinstance(ocm_data, dict):
            raise ValueError("配置格式错误: 'ocm' 必须是字典类型")
        data.update(ocm_data)

    known_fields = {f.name for f in fields(ExporterConfig)}
    unknown = sorted(set(data) - known_fields)
    if unknown:
        raise ValueError(f"配置格式错误: 未知字段 {', '.join(unknown)}")

    return data

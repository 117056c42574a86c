#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
OCM Quota Exporter 主程序入口

功能：
- 解析命令行参数和配置文件
- 解析组织 ID，创建 QuotaCost 客户端
- 启动 Flask HTTP 服务器
- 暴露 /metrics 端点供 Prometheus 抓取
- 暴露 /health 健康检查端点
"""

import argparse
import logging
import sys
from typing import List, Optional

from flask import Flask
from prometheus_client import CollectorRegistry, generate_latest, CONTENT_TYPE_LATEST

from collector import QuotaCostCollector, LoggingErrorReporter
from config.loader import load_exporter_config, ExporterConfig, DEFAULT_PORT
from config.validator import validate_config
from provider.ocm.account import resolve_organization_id
from provider.ocm.connection import OCMConnection
from provider.ocm.quota_cost import QuotaCostClient

logger = logging.getLogger(__name__)


def create_app(registry: CollectorRegistry) -> Flask:
    """
    创建 Flask 应用

    Args:
        registry: 指标注册表（/metrics 只输出该注册表中的指标）

    Returns:
        Flask 应用
    """
    app = Flask(__name__)

    @app.route('/metrics')
    def metrics():
        """
        Prometheus metrics 端点

        每次请求都会触发一次 OCM 配额成本采集
        """
        return generate_latest(registry), 200, {'Content-Type': CONTENT_TYPE_LATEST}

    @app.route('/health')
    def health():
        """健康检查端点（不访问 OCM）"""
        return {'status': 'healthy'}, 200

    return app


def build_parser() -> argparse.ArgumentParser:
    """命令行参数定义"""
    parser = argparse.ArgumentParser(
        prog='ocm-exporter',
        description='Starts the OCM metrics exporter'
    )
    parser.add_argument('-p', '--port', type=int, default=None,
                        help=f'Port to listen on (default {DEFAULT_PORT})')
    parser.add_argument('-o', '--organization-id', dest='organization_id', default=None,
                        help='Organization ID to query quotas for')
    parser.add_argument('-t', '--ocm-token-path', dest='token_path', default=None,
                        help='Path to file containing OCM token')
    parser.add_argument('-d', '--debug', action='store_true', default=None,
                        help='Enable debug logging')
    parser.add_argument('-c', '--config', dest='config_path', default=None,
                        help='Path to YAML config file')
    parser.add_argument('--url', default=None,
                        help='OCM API URL')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Deadline in seconds for fetching quota costs on each scrape')
    return parser


def setup_logging(debug: bool):
    """配置日志"""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    # 减少 Flask 日志
    logging.getLogger('werkzeug').setLevel(logging.WARNING)


def build_registry(config: ExporterConfig) -> CollectorRegistry:
    """
    创建 OCM 连接、解析组织 ID、注册收集器

    Args:
        config: 已验证的配置

    Returns:
        包含 ocm_quota_cost 收集器的注册表

    Raises:
        OCMError: 无法获取当前账号的组织信息
    """
    connection = OCMConnection(
        token=config.token,
        url=config.url,
        timeout=config.timeout,
        max_retries=config.max_retries
    )

    organization_id = resolve_organization_id(config.organization_id, connection)
    quota_client = QuotaCostClient(connection, organization_id, page_size=config.page_size)

    registry = CollectorRegistry()
    QuotaCostCollector(
        quota_client,
        registry=registry,
        reporter=LoggingErrorReporter(registry=registry),
        scrape_timeout=config.timeout
    )
    logger.info(f"已注册 ocm_quota_cost 收集器: organization_id={organization_id}")
    return registry


def main(argv: Optional[List[str]] = None):
    """
    主函数：启动 Flask 服务器

    功能：
    1. 加载配置（命令行 > 环境变量 > 配置文件 > 默认值）
    2. 解析组织 ID
    3. 注册收集器
    4. 启动 HTTP 服务器
    """
    args = build_parser().parse_args(argv)
    overrides = {
        'port': args.port,
        'organization_id': args.organization_id,
        'token_path': args.token_path,
        'debug': args.debug,
        'url': args.url,
        'timeout': args.timeout,
    }

    try:
        config = load_exporter_config(args.config_path, overrides=overrides)
    except Exception as e:
        setup_logging(bool(args.debug))
        logger.error(f"加载配置失败: {e}")
        sys.exit(1)

    setup_logging(config.debug)
    logger.info("Starting OCM Quota Exporter...")

    is_valid, error_message = validate_config(config)
    if not is_valid:
        logger.error(f"配置无效: {error_message}")
        sys.exit(1)

    try:
        registry = build_registry(config)
    except Exception as e:
        logger.error(f"初始化 OCM 客户端失败: {e}")
        sys.exit(1)

    app = create_app(registry)

    logger.info(f"Starting HTTP server on port {config.port}")
    try:
        app.run(host='0.0.0.0', port=config.port, debug=False)
    except OSError as e:
        logger.error(f"无法监听端口 {config.port}: {e}")
        sys.exit(1)


if __name__ == '__main__':
    main()

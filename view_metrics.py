#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
查看采集到的 OCM Quota 指标

功能：
1. 从 metrics 端点获取 ocm_quota_cost 指标
2. 按组织、配额汇总 consumed / allowed
3. 显示特定组织的指标
"""

import urllib.request
import sys
from collections import defaultdict

from prometheus_client.parser import text_string_to_metric_families

METRIC_NAME = 'ocm_quota_cost'
DEFAULT_PORT = 9090


def fetch_metrics(port=DEFAULT_PORT):
    """从 metrics 端点获取指标"""
    try:
        with urllib.request.urlopen(f'http://localhost:{port}/metrics', timeout=10) as response:
            return response.read().decode('utf-8')
    except Exception as e:
        print(f"❌ 无法连接到 exporter: {e}")
        print("   请确保 exporter 正在运行: python3 main.py")
        return None


def parse_metrics(metrics_text):
    """
    解析 metrics 文本，只保留 ocm_quota_cost 样本

    Returns:
        样本列表，每项为 {'organization_id', 'quota_id', 'type', 'value'}
    """
    samples = []
    for family in text_string_to_metric_families(metrics_text):
        if family.name != METRIC_NAME:
            continue
        for sample in family.samples:
            samples.append({
                'organization_id': sample.labels.get('organization_id', ''),
                'quota_id': sample.labels.get('quota_id', ''),
                'type': sample.labels.get('type', ''),
                'value': sample.value
            })
    return samples


def summarize(samples):
    """
    按组织和配额汇总

    Returns:
        {organization_id: {quota_id: {'consumed': x, 'allowed': y}}}
    """
    by_org = defaultdict(lambda: defaultdict(dict))
    for sample in samples:
        by_org[sample['organization_id']][sample['quota_id']][sample['type']] = sample['value']
    return {org: dict(quotas) for org, quotas in by_org.items()}


def format_usage(consumed, allowed):
    """使用率（allowed 为 0 或缺失时显示 -）"""
    if consumed is None or not allowed:
        return '-'
    return f"{consumed / allowed * 100:.1f}%"


def view_summary(port=DEFAULT_PORT):
    """查看汇总信息"""
    print("=" * 60)
    print("OCM Quota 指标汇总")
    print("=" * 60)

    metrics_text = fetch_metrics(port)
    if metrics_text is None:
        return

    samples = parse_metrics(metrics_text)
    by_org = summarize(samples)

    print(f"\n总样本数: {len(samples)} 条")
    print(f"组织数: {len(by_org)}")
    for org, quotas in sorted(by_org.items()):
        print(f"  - {org}: {len(quotas)} 个配额")


def view_by_organization(port=DEFAULT_PORT, organization_id=None):
    """按组织查看指标详情"""
    print("=" * 60)
    if organization_id:
        print(f"组织 {organization_id} 的 Quota 指标")
    else:
        print("按组织查看 Quota 指标")
    print("=" * 60)

    metrics_text = fetch_metrics(port)
    if metrics_text is None:
        return

    by_org = summarize(parse_metrics(metrics_text))

    for org, quotas in sorted(by_org.items()):
        if organization_id and org != organization_id:
            continue
        print(f"\n组织: {org}")
        for quota_id, values in sorted(quotas.items()):
            consumed = values.get('consumed')
            allowed = values.get('allowed')
            print(f"  {quota_id}: consumed={consumed}, allowed={allowed}, 使用率={format_usage(consumed, allowed)}")


def main():
    """主函数"""
    port = DEFAULT_PORT
    args = sys.argv[1:]
    if len(args) >= 2 and args[0] == '--port':
        port = int(args[1])
        args = args[2:]

    command = args[0] if args else 'summary'

    if command == 'summary':
        view_summary(port)
    elif command == 'org':
        organization_id = args[1] if len(args) > 1 else None
        view_by_organization(port, organization_id)
    else:
        print("用法:")
        print("  python3 view_metrics.py [--port 9090] summary         # 查看汇总")
        print("  python3 view_metrics.py [--port 9090] org [组织ID]    # 按组织查看")


if __name__ == '__main__':
    main()

# -*- coding: utf-8 -*-
"""HTTP 端点和启动流程测试"""

from unittest.mock import patch

import pytest
from prometheus_client import CollectorRegistry, CONTENT_TYPE_LATEST

import main
from collector import QuotaCostCollector
from config.loader import ExporterConfig
from provider.ocm.errors import OCMError
from provider.ocm.models import QuotaCost


@pytest.fixture
def registry():
    return CollectorRegistry()


class TestEndpoints:

    def test_metrics_endpoint(self, registry, make_client):
        QuotaCostCollector(make_client([QuotaCost('o1', 'q1', consumed=5, allowed=10)]), registry=registry)
        client = main.create_app(registry).test_client()

        response = client.get('/metrics')

        assert response.status_code == 200
        assert response.headers['Content-Type'] == CONTENT_TYPE_LATEST
        body = response.get_data(as_text=True)
        assert 'ocm_quota_cost{organization_id="o1",quota_id="q1",type="consumed"} 5.0' in body
        assert 'ocm_quota_cost{organization_id="o1",quota_id="q1",type="allowed"} 10.0' in body

    def test_metrics_endpoint_during_upstream_outage(self, registry, make_client):
        QuotaCostCollector(make_client(error=OCMError("down", status=503)), registry=registry)
        client = main.create_app(registry).test_client()

        response = client.get('/metrics')

        assert response.status_code == 200
        assert 'ocm_quota_cost{' not in response.get_data(as_text=True)

    def test_health_endpoint(self, registry, make_client):
        client_handle = make_client()
        QuotaCostCollector(client_handle, registry=registry)
        client = main.create_app(registry).test_client()

        response = client.get('/health')

        assert response.status_code == 200
        assert response.get_json() == {'status': 'healthy'}
        assert client_handle.calls == []


class TestParser:

    def test_short_flags(self):
        args = main.build_parser().parse_args(['-p', '9100', '-o', 'org-1', '-t', '/tmp/token', '-d'])

        assert args.port == 9100
        assert args.organization_id == 'org-1'
        assert args.token_path == '/tmp/token'
        assert args.debug is True

    def test_unset_flags_are_none(self):
        args = main.build_parser().parse_args([])

        assert args.port is None
        assert args.debug is None
        assert args.timeout is None


class TestBuildRegistry:

    def test_resolves_organization_and_registers_collector(self):
        config = ExporterConfig(token='t', organization_id='')
        with patch.object(main, 'resolve_organization_id', return_value='org-9') as resolve, \
                patch.object(main.QuotaCostClient, 'list', return_value=[QuotaCost('org-9', 'q1', consumed=1, allowed=2)]):
            registry = main.build_registry(config)

            value = registry.get_sample_value(
                'ocm_quota_cost', {'organization_id': 'org-9', 'quota_id': 'q1', 'type': 'allowed'}
            )

        assert resolve.call_args[0][0] == ''
        assert value == 2.0


class TestMain:

    def test_exits_when_token_missing(self, monkeypatch):
        monkeypatch.delenv('OCM_TOKEN', raising=False)

        with pytest.raises(SystemExit) as exc_info:
            main.main([])

        assert exc_info.value.code == 1

    def test_exits_when_organization_cannot_be_resolved(self, monkeypatch):
        monkeypatch.setenv('OCM_TOKEN', 't')

        with patch.object(main, 'resolve_organization_id', side_effect=OCMError("unauthorized", status=401)):
            with pytest.raises(SystemExit) as exc_info:
                main.main([])

        assert exc_info.value.code == 1

    def test_starts_server_on_configured_port(self, monkeypatch):
        monkeypatch.setenv('OCM_TOKEN', 't')

        with patch.object(main, 'resolve_organization_id', return_value='org-1'), \
                patch.object(main.Flask, 'run') as run:
            main.main(['-p', '9191', '-o', 'org-1'])

        assert run.call_args[1]['port'] == 9191
        assert run.call_args[1]['host'] == '0.0.0.0'

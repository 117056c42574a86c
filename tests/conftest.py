# -*- coding: utf-8 -*-
"""测试公共 fixture"""

from typing import List, Optional

import pytest

from collector.reporter import ErrorReporter, ErrorStage
from provider.interfaces import QuotaSourceClient
from provider.ocm.models import QuotaCost


class FakeQuotaClient(QuotaSourceClient):
    """返回固定记录或抛出固定异常的 QuotaSourceClient"""

    def __init__(self, quota_costs: Optional[List[QuotaCost]] = None, error: Optional[Exception] = None):
        self.quota_costs = quota_costs or []
        self.error = error
        self.calls = []

    def list(self, fetch_related_resources: bool = True, deadline: Optional[float] = None) -> List[QuotaCost]:
        self.calls.append({'fetch_related_resources': fetch_related_resources, 'deadline': deadline})
        if self.error is not None:
            raise self.error
        return list(self.quota_costs)

    def get_organization_id(self) -> str:
        return 'o1'


class RecordingErrorReporter(ErrorReporter):
    """记录所有上报的错误"""

    def __init__(self):
        self.reports = []

    def report(self, stage: ErrorStage, error: Exception, record: Optional[QuotaCost] = None):
        self.reports.append((stage, error, record))


@pytest.fixture
def reporter():
    return RecordingErrorReporter()


@pytest.fixture
def make_client():
    def _make(quota_costs=None, error=None):
        return FakeQuotaClient(quota_costs=quota_costs, error=error)
    return _make

from __future__ import annotations

import pytest

LINE_DSL = """linechart
title: Monthly Sales
width: 600
height: 400
colors: #3498db

data:
Jan | 120
Feb | 150
Mar | 180
"""

TWO_CHART_DSL = """linechart
title: Visitors
data:
Mon | 10
Tue | 20
---
piechart
title: Browsers
data:
Firefox | 30
Chrome | 70
"""


@pytest.fixture
def line_dsl() -> str:
    return LINE_DSL


@pytest.fixture
def two_chart_dsl() -> str:
    return TWO_CHART_DSL

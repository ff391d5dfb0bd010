"""Jinja templates for the opportunity report styles."""

from jinja2 import BaseLoader, Environment, StrictUndefined

from incremental_insights.formatting import (
    format_currency,
    format_kpi,
    format_percent,
    format_ratio,
    plain_number,
)

ENV = Environment(
    loader=BaseLoader(),
    autoescape=False,
    trim_blocks=True,
    lstrip_blocks=True,
    undefined=StrictUndefined,
)
ENV.filters["currency"] = format_currency
ENV.filters["percent"] = format_percent
ENV.filters["ratio"] = format_ratio
ENV.filters["kpi"] = format_kpi
ENV.filters["plain"] = plain_number

EXECUTIVE_SUBJECT = ENV.from_string(
    "Executive Summary: Incremental Growth Opportunity - {{ target }}"
)
EXECUTIVE_BODY = ENV.from_string(
    """Hi Team,

We have identified a significant incremental budget opportunity of **{{ total | currency }}** across high-performing campaigns for {{ target }}.

**Key Highlights:**
• Total Opportunity: {{ total | currency }}
• Campaigns Qualifying: {{ count }}

These campaigns are currently pacing at 100% capacity with high performance scores. Unlocking this budget will directly maximize flight delivery.

Shall we proceed with this allocation?

Best,
[Your Name]"""
)

ACTION_SUBJECT = ENV.from_string("ACTION REQUIRED: Unlock {{ total | currency }} for {{ target }}")
ACTION_BODY = ENV.from_string(
    """Hi everyone,

Performance alert for {{ target }}: We are capped on high-value inventory.

We are leaving **{{ total | currency }}** on the table for campaigns pacing at 100%.

**Recommended Action:**
Approve incremental budget for the following {{ count }} campaigns immediately to capture this demand.

{% for opp in shown %}
• {{ opp.campaign }}: +{{ opp.calculated_opportunity | currency }}
{% endfor %}
{% if remaining %}
...and {{ remaining }} others.
{% endif %}

Please confirm approval by EOD.

Thanks,
[Your Name]"""
)

STANDARD_SUBJECT = ENV.from_string("Incremental Opportunity: {{ target }}")
STANDARD_BODY = ENV.from_string(
    """Hi Team,

We analyzed the current campaign performance for {{ target }} and identified meaningful incremental opportunities.

SUMMARY
--------------------------------------------------
Total Incremental Opportunity: {{ total | currency }}
Qualifying Campaigns: {{ count }}
--------------------------------------------------

Below are the top campaigns pacing at 100% with high decision power that could utilize additional budget:

{% for opp in shown %}
• {{ opp.campaign }} ({{ opp.advertiser }})
  - Opportunity: {{ opp.calculated_opportunity | currency }}
  - Days Remaining: {{ opp.days_remaining | plain }}
  - Current Pacing: {{ opp.pacing | percent }}
  - Avg. KPI: {{ opp.avg_kpi_value | kpi(opp.kpi_type) }}
  - KPI Goal: {{ opp.goal_value | kpi(opp.kpi_type) }}
  - KPI Performance: {{ opp.kpi_perf_ratio | ratio }} (Goal Beaten: {{ "Yes" if opp.beating_goal else "No" }})
  - Decision Power Score: {{ opp.score | plain }}

{% endfor %}
{% if remaining %}
...and {{ remaining }} more.

{% endif %}
We recommend unlocking this incremental budget to maximize performance for the remainder of the flight.

Please let us know if you'd like to proceed.

Best,
[Your Name]"""
)

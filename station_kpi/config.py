"""
Configuration: metric registry, role templates, scoring constants, file paths.

METRIC_REGISTRY maps each canonical metric id to its display name, target,
unit, and polarity. ROLE_TEMPLATES maps each manager role to the weighted
categories a new participant of that role starts with.
"""

from pathlib import Path

# ---------------------------------------------------------------------------
# File paths. Adjust these if source files move
# ---------------------------------------------------------------------------
DATA_DIR = Path(__file__).resolve().parent.parent

HISTORY_WORKBOOK_FILE = DATA_DIR / "metric_history.xlsx"

# ---------------------------------------------------------------------------
# Station identity
# ---------------------------------------------------------------------------
STATION_NAME = "Ground Handling Station"

# ---------------------------------------------------------------------------
# Scoring constants
# ---------------------------------------------------------------------------
SCORE_FLOOR = 0
SCORE_CEILING = 150

# Scores used when a metric's target is zero
ZERO_TARGET_BONUS_SCORE = 125
ZERO_TARGET_NEUTRAL_SCORE = 100
ZERO_TARGET_FAIL_SCORE = 0

# Score bands shared by cards, matrices and alerts
GREEN_THRESHOLD = 90
AMBER_THRESHOLD = 75
ALERT_THRESHOLD = 90

# ---------------------------------------------------------------------------
# Reporting windows and history
# ---------------------------------------------------------------------------
# Number of trailing monthly samples averaged per window
WINDOW_SAMPLE_COUNTS: dict[str, int] = {
    "quarterly": 3,
    "yearly": 12,
}

# Units whose window averages are rounded to one decimal (others use two)
ONE_DECIMAL_UNITS = {"percentage", "score", "minutes"}

# Maximum monthly samples retained per metric
HISTORY_MAX_LENGTH = 12

# ---------------------------------------------------------------------------
# Roles
# ---------------------------------------------------------------------------
ROLES: dict[str, str] = {
    "RAMP": "Ramp Operations",
    "PASSENGER": "Passenger Services",
    "SUPPORT": "Business Support",
    "SAFETY": "Safety & Quality",
    "TECHNICAL": "Technical Services",
}

# ---------------------------------------------------------------------------
# Metric Registry
# ---------------------------------------------------------------------------
# target: value that scores exactly 100
# unit: one of percentage, minutes, per_1000_pax, incidents, score,
#       currency, days, per_1000_mov
# lower_is_better: polarity flag used by the score calculator
METRIC_REGISTRY: dict[str, dict] = {
    "otp": {
        "name": "On-Time Performance",
        "target": 98,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "avg_turnaround_time": {
        "name": "Average Turnaround Time",
        "target": 40,
        "unit": "minutes",
        "lower_is_better": True,
    },
    "loading_accuracy": {
        "name": "Loading Accuracy",
        "target": 99.8,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "turnaround_plan_compliance": {
        "name": "Turnaround Plan Compliance",
        "target": 98,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "accident_rate": {
        "name": "Accident & Injury Rate",
        "target": 1.0,
        "unit": "incidents",
        "lower_is_better": True,
    },
    "fod_incidents": {
        "name": "FOD Incidents",
        "target": 0,
        "unit": "incidents",
        "lower_is_better": True,
    },
    "ground_damage_rate": {
        "name": "Ground Damage Rate",
        "target": 0.3,
        "unit": "per_1000_mov",
        "lower_is_better": True,
    },
    "marshalling_incidents_rate": {
        "name": "Marshalling Incidents Rate",
        "target": 0.5,
        "unit": "per_1000_mov",
        "lower_is_better": True,
    },
    "cost_per_turnaround": {
        "name": "Cost per Turnaround",
        "target": 4800,
        "unit": "currency",
        "lower_is_better": True,
    },
    "overtime_costs": {
        "name": "Overtime Costs",
        "target": 60000,
        "unit": "currency",
        "lower_is_better": True,
    },
    "employee_turnover": {
        "name": "Employee Turnover",
        "target": 0.8,
        "unit": "percentage",
        "lower_is_better": True,
    },
    "training_completion": {
        "name": "Training Completion",
        "target": 98,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "absenteeism_rate": {
        "name": "Absenteeism Rate",
        "target": 3,
        "unit": "percentage",
        "lower_is_better": True,
    },
    "passenger_satisfaction_csat": {
        "name": "Passenger Satisfaction (CSAT)",
        "target": 85,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "checkin_queue_time": {
        "name": "Check-in Queue Time",
        "target": 5,
        "unit": "minutes",
        "lower_is_better": True,
    },
    "formal_complaints": {
        "name": "Formal Complaints",
        "target": 1.5,
        "unit": "per_1000_pax",
        "lower_is_better": True,
    },
    "prm_wait_time": {
        "name": "PRM Wait Time",
        "target": 15,
        "unit": "minutes",
        "lower_is_better": True,
    },
    "first_bag_delivery": {
        "name": "First Bag Delivery",
        "target": 15,
        "unit": "minutes",
        "lower_is_better": True,
    },
    "last_bag_delivery": {
        "name": "Last Bag Delivery",
        "target": 30,
        "unit": "minutes",
        "lower_is_better": True,
    },
    "boarding_gate_performance": {
        "name": "Gate Closure Compliance",
        "target": 98,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "baggage_accuracy": {
        "name": "Mishandled Baggage Rate",
        "target": 2.0,
        "unit": "per_1000_pax",
        "lower_is_better": True,
    },
    "self_checkin_usage": {
        "name": "Self Check-in Usage",
        "target": 60,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "sla_compliance": {
        "name": "SLA Compliance",
        "target": 99.5,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "roster_efficiency": {
        "name": "Roster Efficiency",
        "target": 95,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "productivity_per_agent": {
        "name": "Productivity per Agent",
        "target": 25,
        "unit": "score",
        "lower_is_better": False,
    },
    "budget_adherence": {
        "name": "Budget Adherence",
        "target": 100,
        "unit": "percentage",
        "lower_is_better": True,
    },
    "gse_availability": {
        "name": "GSE Availability",
        "target": 97,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "mean_time_to_repair": {
        "name": "Mean Time to Repair",
        "target": 240,
        "unit": "minutes",
        "lower_is_better": True,
    },
    "first_time_fix_rate": {
        "name": "First-Time Fix Rate",
        "target": 90,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "preventive_maintenance_compliance": {
        "name": "Preventive Maintenance Compliance",
        "target": 95,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "spare_parts_availability": {
        "name": "Spare Parts Availability",
        "target": 95,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "equipment_downtime": {
        "name": "Equipment Downtime",
        "target": 2,
        "unit": "percentage",
        "lower_is_better": True,
    },
    "audit_compliance": {
        "name": "Safety Audit Score",
        "target": 95,
        "unit": "score",
        "lower_is_better": False,
    },
    "corrective_action_closure_rate": {
        "name": "Corrective Action Closure Rate",
        "target": 95,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "proactive_safety_reports": {
        "name": "Proactive Safety Reports",
        "target": 20,
        "unit": "incidents",
        "lower_is_better": False,
    },
    "security_compliance_rate": {
        "name": "Security Compliance Rate",
        "target": 98,
        "unit": "percentage",
        "lower_is_better": False,
    },
    "security_breach_incidents": {
        "name": "Security Breach Incidents",
        "target": 0,
        "unit": "incidents",
        "lower_is_better": True,
    },
    "fuel_spill_incidents": {
        "name": "Fuel Spill Incidents",
        "target": 0,
        "unit": "incidents",
        "lower_is_better": True,
    },
}

# ---------------------------------------------------------------------------
# Role templates
# ---------------------------------------------------------------------------
# Each category lists (metric_id, seed_value) pairs. Seed values drive the
# synthetic history generator; weights per role sum to 100.
_LEADERSHIP_METRICS = [
    ("employee_turnover", 0.7),
    ("training_completion", 99),
    ("absenteeism_rate", 2.5),
]


def _leadership_category(weight: int) -> dict:
    return {
        "id": "leadership_management",
        "name": "Leadership & Team Management",
        "weight": weight,
        "metrics": list(_LEADERSHIP_METRICS),
    }


ROLE_TEMPLATES: dict[str, list[dict]] = {
    "RAMP": [
        {
            "id": "operational_efficiency_ramp",
            "name": "Ramp Operational Efficiency",
            "weight": 45,
            "metrics": [
                ("otp", 98.5),
                ("avg_turnaround_time", 38),
                ("loading_accuracy", 99.9),
                ("turnaround_plan_compliance", 97),
            ],
        },
        {
            "id": "safety_security_ramp",
            "name": "Ramp Safety & Security",
            "weight": 25,
            "metrics": [
                ("accident_rate", 0.5),
                ("fod_incidents", 0),
                ("ground_damage_rate", 0.2),
                ("marshalling_incidents_rate", 0.6),
            ],
        },
        {
            "id": "financial_performance_ramp",
            "name": "Ramp Financial Performance",
            "weight": 10,
            "metrics": [
                ("cost_per_turnaround", 4500),
                ("overtime_costs", 65000),
            ],
        },
        _leadership_category(20),
    ],
    "PASSENGER": [
        {
            "id": "customer_satisfaction_pax",
            "name": "Customer & Passenger Satisfaction",
            "weight": 40,
            "metrics": [
                ("passenger_satisfaction_csat", 88),
                ("checkin_queue_time", 4),
                ("formal_complaints", 1),
                ("prm_wait_time", 12),
            ],
        },
        {
            "id": "operational_efficiency_pax",
            "name": "Service Operational Efficiency",
            "weight": 30,
            "metrics": [
                ("first_bag_delivery", 14),
                ("last_bag_delivery", 28),
                ("boarding_gate_performance", 99),
                ("baggage_accuracy", 1.8),
                ("self_checkin_usage", 65),
            ],
        },
        {
            "id": "financial_performance_pax",
            "name": "Service Financial Performance",
            "weight": 10,
            "metrics": [
                ("overtime_costs", 45000),
                ("sla_compliance", 99.8),
            ],
        },
        _leadership_category(20),
    ],
    "TECHNICAL": [
        {
            "id": "equipment_reliability",
            "name": "Equipment Reliability",
            "weight": 40,
            "metrics": [
                ("gse_availability", 98),
                ("mean_time_to_repair", 220),
                ("first_time_fix_rate", 92),
            ],
        },
        {
            "id": "maintenance_efficiency",
            "name": "Maintenance Efficiency",
            "weight": 30,
            "metrics": [
                ("preventive_maintenance_compliance", 98),
                ("spare_parts_availability", 95),
                ("equipment_downtime", 3),
            ],
        },
        {
            "id": "financial_performance_tech",
            "name": "Technical Financial Performance",
            "weight": 10,
            "metrics": [
                ("budget_adherence", 100),
                ("overtime_costs", 40000),
            ],
        },
        _leadership_category(20),
    ],
    "SAFETY": [
        {
            "id": "safety_quality_management",
            "name": "Safety & Quality Management",
            "weight": 45,
            "metrics": [
                ("audit_compliance", 98),
                ("corrective_action_closure_rate", 95),
                ("proactive_safety_reports", 25),
                ("security_compliance_rate", 99),
            ],
        },
        {
            "id": "risk_management",
            "name": "Risk Management",
            "weight": 35,
            "metrics": [
                ("accident_rate", 1),
                ("fod_incidents", 0),
                ("security_breach_incidents", 0),
                ("fuel_spill_incidents", 0),
            ],
        },
        _leadership_category(20),
    ],
    "SUPPORT": [
        {
            "id": "service_efficiency_support",
            "name": "Service & Support Efficiency",
            "weight": 40,
            "metrics": [
                ("sla_compliance", 99.8),
                ("roster_efficiency", 95),
                ("productivity_per_agent", 28),
            ],
        },
        {
            "id": "financial_performance_support",
            "name": "Support Financial Performance",
            "weight": 30,
            "metrics": [
                ("budget_adherence", 98),
                ("overtime_costs", 30000),
            ],
        },
        _leadership_category(30),
    ],
}

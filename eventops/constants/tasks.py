# eventops/constants/tasks.py
"""
Planning task constants: priority ordering and starter checklists.
"""

# Lower sorts first
PRIORITY_ORDER = {"urgent": 0, "high": 1, "medium": 2, "low": 3}

DEFAULT_TEMPLATE = "conference"

TASK_TEMPLATES = {
    "conference": [
        ("Secure venue and sign contract", "venue", "urgent"),
        ("Create event budget breakdown", "budget", "high"),
        ("Research and contact potential sponsors", "sponsors", "high"),
        ("Book catering vendor", "vendors", "high"),
        ("Hire AV equipment provider", "vendors", "medium"),
        ("Set up registration platform", "registration", "high"),
        ("Design marketing materials", "marketing", "medium"),
        ("Launch social media campaign", "marketing", "medium"),
        ("Confirm speaker lineup", "content", "high"),
        ("Arrange transportation for VIPs", "logistics", "low"),
        ("Obtain necessary permits", "legal", "medium"),
        ("Hire event photographer", "vendors", "low"),
    ],
    "workshop": [
        ("Book workshop venue", "venue", "urgent"),
        ("Finalize workshop curriculum", "content", "high"),
        ("Prepare workshop materials", "content", "high"),
        ("Set up registration", "registration", "medium"),
        ("Arrange catering for breaks", "vendors", "medium"),
        ("Promote workshop on social media", "marketing", "medium"),
        ("Test all equipment and tech", "logistics", "high"),
    ],
    "hackathon": [
        ("Secure hackathon venue", "venue", "urgent"),
        ("Reach out to tech sponsors", "sponsors", "high"),
        ("Define hackathon challenges/tracks", "content", "high"),
        ("Set up judging criteria and panel", "content", "high"),
        ("Arrange prizes and swag", "sponsors", "medium"),
        ("Organize food and refreshments", "vendors", "high"),
        ("Set up WiFi and power stations", "logistics", "urgent"),
        ("Create participant registration", "registration", "high"),
        ("Plan mentorship program", "content", "medium"),
        ("Prepare demo/presentation setup", "logistics", "medium"),
    ],
    "networking": [
        ("Book networking event venue", "venue", "urgent"),
        ("Arrange food and drinks", "vendors", "high"),
        ("Create guest list and invitations", "registration", "high"),
        ("Design name badges", "marketing", "medium"),
        ("Plan icebreaker activities", "content", "medium"),
        ("Hire DJ or background music", "vendors", "low"),
    ],
}

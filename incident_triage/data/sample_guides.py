from incident_triage.domain.loader import load_guide

# ==============================================================================
# GUIDE ROWS
# ==============================================================================
# Rows use the spreadsheet column names, exactly as an uploaded sheet would.

# --- API HEALTH (mock commands: "get status", "reset api") ---
API_HEALTH_ROWS = [
    {
        "id": "check_status",
        "description": "Check cluster status reported by the controller.",
        "command": "get status",
        "expectPattern": r"unhealthy=0\b",
        "nextOnMatch": "healthy",
        "nextOnNoMatch": "reset_api",
    },
    {
        "id": "reset_api",
        "description": "Reset the API service and re-check status.",
        "command": "reset api",
        "expectPattern": "^OK",
        "nextOnMatch": "check_status",
        "nextOnNoMatch": "escalate",
    },
    {
        "id": "healthy",
        "description": "All nodes healthy. Close as not reproducible.",
    },
    {
        "id": "escalate",
        "description": "Reset failed. Escalate to the platform on-call.",
    },
]

# --- SDN LINK (mock command: "check link") ---
SDN_LINK_ROWS = [
    {
        "id": "1",
        "description": "Check the controller path state.",
        "command": "check link",
        "expectPattern": r"path=down",
        "nextOnMatch": "3",
        "nextOnNoMatch": "2",
    },
    {
        "id": "2",
        "description": "Path is up. Check for packet loss.",
        "command": "check link",
        "expectPattern": r"loss=0%",
        "nextOnMatch": "4",
        "nextOnNoMatch": "3",
    },
    {
        "id": "3",
        "description": "Path degraded. Fail over to the secondary controller.",
    },
    {
        "id": "4",
        "description": "Link healthy. Investigate the application layer.",
    },
]

# ==============================================================================
# REGISTRY
# ==============================================================================

SAMPLE_GUIDES = {
    guide.name: guide
    for guide in (
        load_guide(API_HEALTH_ROWS, name="api_health"),
        load_guide(SDN_LINK_ROWS, name="sdn_link"),
    )
}

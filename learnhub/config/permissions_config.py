"""
Permissions and Roles Configuration
This config defines the permission matrix for every module and the two user roles.
Route dependencies resolve a caller's role to the permission names listed here.
"""

from typing import List

# Define modules and their actions
MODULES = {
    "workshops": {
        "resource": "workshops",
        "actions": ["create", "read", "update", "delete"],
        "description": "Workshop catalog management"
    },
    "lessons": {
        "resource": "lessons",
        "actions": ["create", "read", "update", "delete", "reorder"],
        "description": "Lesson management within a workshop"
    },
    "registrations": {
        "resource": "registrations",
        "actions": ["create", "read", "list"],
        "description": "Learner enrollment in workshops"
    },
    "reflections": {
        "resource": "reflections",
        "actions": ["submit", "read", "review"],
        "description": "Lesson reflections and their review"
    },
    "progress": {
        "resource": "progress",
        "actions": ["read", "leaderboard"],
        "description": "Points ledger derived from reflection reviews"
    }
}

# Actions granted to each user role, per module
ROLE_TYPES = {
    "recruiter": {
        "grants": {
            "workshops": ["create", "read", "update", "delete"],
            "lessons": ["create", "read", "update", "delete", "reorder"],
            "registrations": ["list"],
            "reflections": ["read", "review"],
            "progress": ["leaderboard"],
        },
        "description": "Workshop creator; reviews learner reflections"
    },
    "job_seeker": {
        "grants": {
            "workshops": ["read"],
            "lessons": ["read"],
            "registrations": ["create", "read"],
            "reflections": ["submit", "read"],
            "progress": ["read", "leaderboard"],
        },
        "description": "Learner; registers for workshops and submits reflections"
    }
}

# Additional descriptions for specific permissions
MODULE_SPECIFIC_PERMISSIONS = {
    "lessons": {
        "reorder": "Move lessons up or down within a workshop"
    },
    "registrations": {
        "list": "List learners registered for an owned workshop"
    },
    "reflections": {
        "submit": "Submit a reflection for a lesson",
        "review": "Approve or reject a reflection (awards or deducts points)"
    },
    "progress": {
        "leaderboard": "View the points leaderboard"
    }
}


def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the role grants
    Format: {
        "permissions": [
            {"name": "workshops:create", "resource": "workshops", "action": "create", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "recruiter", "description": "...", "permissions": ["lessons:create", ...]},
            ...
        ]
    }
    """
    permissions = []
    roles = []

    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            description = f"{action.capitalize()} {resource}"
            if module_name in MODULE_SPECIFIC_PERMISSIONS and action in MODULE_SPECIFIC_PERMISSIONS[module_name]:
                description = MODULE_SPECIFIC_PERMISSIONS[module_name][action]
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": description
            })

    for role_name, role_config in ROLE_TYPES.items():
        role_permissions = []
        for module_name, actions in role_config["grants"].items():
            module_config = MODULES[module_name]
            for action in actions:
                if action in module_config["actions"]:
                    role_permissions.append(f"{module_config['resource']}:{action}")
        roles.append({
            "name": role_name,
            "description": role_config["description"],
            "permissions": sorted(role_permissions)
        })

    return {
        "permissions": permissions,
        "roles": roles
    }


PERMISSION_MATRIX = get_permission_matrix()


def get_role_permissions(role: str) -> List[str]:
    """Permission names granted to a user role; unknown roles get none."""
    for entry in PERMISSION_MATRIX["roles"]:
        if entry["name"] == role:
            return entry["permissions"]
    return []

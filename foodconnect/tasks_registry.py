# foodconnect/tasks_registry.py

from foodconnect.services import maintenance

# --- Wrappers; each job opens its own DB session ---

def run_close_expired_campaigns():
    maintenance.close_expired_campaigns_task()

def run_cleanup_old_notifications():
    maintenance.cleanup_old_notifications_task()

def run_purge_expired_tokens():
    maintenance.purge_expired_tokens_task()


# --- Jobs available for manual runs from the admin API ---
# 'function' is called by BackgroundTasks, 'is_async' tells how to call it.

TASKS = {
    "close_expired_campaigns": {
        "function": run_close_expired_campaigns,
        "description": "Closes published campaigns whose deadline has passed.",
        "is_async": False,
    },
    "cleanup_old_notifications": {
        "function": run_cleanup_old_notifications,
        "description": "Deletes read notifications older than 30 days and any notification older than 90 days.",
        "is_async": False,
    },
    "purge_expired_tokens": {
        "function": run_purge_expired_tokens,
        "description": "Clears expired email verification and password reset tokens.",
        "is_async": False,
    },
}


def get_tasks_list():
    return [
        {"task_name": name, "description": data["description"]}
        for name, data in TASKS.items()
    ]

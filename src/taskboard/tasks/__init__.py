"""
Task subsystem.

Components:
- task_models.py: data structures (Task, PendingDelete, NotificationItem, DeleteResult)
- task_errors.py: error kinds raised by the subsystem
- task_collection.py: the visible task list
- pending_registry.py: deletes that are scheduled but still cancellable
- notification_queue.py: "deleted, undo?" notices kept in step with the registry
- task_scheduler.py: deferred actions on the asyncio loop
- undo_delete.py: controller tying the above together
"""

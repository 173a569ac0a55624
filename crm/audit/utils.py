from crm.audit.models import AuditLog


def audit(action, entity_type, entity_id, actor_user_id=None, data=None):
    return AuditLog.objects.create(
        action=action,
        entity_type=entity_type,
        entity_id=str(entity_id),
        actor_user_id=actor_user_id,
        data_json=data or {},
    )

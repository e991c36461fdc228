"""
PATH: pos/models/audit_log.py

SYNC AUDIT LOG (append-only)

Written by the sync-push service:
- SYNC_PUSH_ACCEPTED            one row per accepted transaction
- SYNC_PUSH_POSTING_HOOK_FAIL   posting hook failed (sync still succeeded)
"""

from django.db import models


class SyncAuditLog(models.Model):
    RESULT_SUCCESS = "SUCCESS"
    RESULT_FAIL = "FAIL"

    RESULT_CHOICES = [
        (RESULT_SUCCESS, "Success"),
        (RESULT_FAIL, "Fail"),
    ]

    ACTION_ACCEPTED = "SYNC_PUSH_ACCEPTED"
    ACTION_POSTING_HOOK_FAIL = "SYNC_PUSH_POSTING_HOOK_FAIL"

    company = models.ForeignKey(
        "companies.Company",
        on_delete=models.PROTECT,
        related_name="sync_audit_logs",
    )
    outlet = models.ForeignKey(
        "companies.Outlet",
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name="sync_audit_logs",
    )
    user_id = models.PositiveBigIntegerField(null=True, blank=True)

    action = models.CharField(max_length=64)
    result = models.CharField(max_length=8, choices=RESULT_CHOICES)
    payload = models.JSONField(default=dict)

    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = "audit_logs"
        ordering = ["-created_at", "-id"]
        indexes = [
            models.Index(fields=["company", "action", "created_at"], name="ix_audit_logs_action"),
        ]

    def __str__(self):
        return f"{self.action} {self.result}"

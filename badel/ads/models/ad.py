from django.db import models
from django.conf import settings
from django.utils.translation import gettext_lazy as _

from ..content import GenericContent, JobContent


class Ad(models.Model):
    class Category(models.TextChoices):
        HOME = "home", _("Home products")
        CARS = "cars", _("Cars")
        REALESTATE = "realestate", _("Real estate")
        SERVICES = "services", _("Services")
        JOBS = "jobs", _("Jobs")
        DONATIONS = "donations", _("Donations")

    class Status(models.TextChoices):
        PENDING = "pending", _("Pending")
        APPROVED = "approved", _("Approved")
        REJECTED = "rejected", _("Rejected")

    class JobType(models.TextChoices):
        FULL_TIME = "full-time", _("Full time")
        PART_TIME = "part-time", _("Part time")
        REMOTE = "remote", _("Remote")
        FREELANCE = "freelance", _("Freelance")

    class JobExperience(models.TextChoices):
        ENTRY = "entry", _("Entry level")
        MID = "mid", _("Mid level")
        SENIOR = "senior", _("Senior")
        ANY = "any", _("Any")

    title = models.CharField(max_length=100)
    description = models.TextField(max_length=1000)
    category = models.CharField(max_length=20, choices=Category.choices)
    sub_category = models.CharField(max_length=50, null=True, blank=True)
    job_type = models.CharField(max_length=20, choices=JobType.choices, null=True, blank=True)
    job_experience = models.CharField(max_length=20, choices=JobExperience.choices, null=True, blank=True)

    # Shown as typed by the owner ("1500$", "negotiable", ...)
    price = models.CharField(max_length=50)
    location = models.CharField(max_length=100)
    whatsapp = models.CharField(max_length=30)
    images = models.JSONField(default=list, blank=True)

    owner = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name='ads',
    )

    status = models.CharField(max_length=10, choices=Status.choices, default=Status.PENDING)
    admin_note = models.TextField(blank=True, default='')
    is_featured = models.BooleanField(default=False)

    views = models.PositiveIntegerField(default=0)
    contact_clicks = models.PositiveIntegerField(default=0)

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        ordering = ['-created_at']
        indexes = [
            models.Index(fields=['category', 'status'], name='ad_category_status_idx'),
            models.Index(fields=['status', 'is_featured', 'created_at'], name='ad_feed_order_idx'),
        ]

    def __str__(self):
        return self.title

    @property
    def is_public(self):
        return self.status == self.Status.APPROVED

    @property
    def content(self):
        """Category-specific part of the ad: job details for jobs, sub-category otherwise."""
        if self.category == self.Category.JOBS:
            return JobContent(job_type=self.job_type, job_experience=self.job_experience)
        return GenericContent(category=self.category, sub_category=self.sub_category)

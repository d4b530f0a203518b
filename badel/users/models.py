from django.db import models
from django.contrib.auth.models import AbstractUser, BaseUserManager
from django.utils import timezone
from django.utils.translation import gettext_lazy as _


class CustomUserManager(BaseUserManager):
    """
    Creates user with email instead of username.
    Emails are stored lower-cased, so lookups are case-insensitive.
    """
    use_in_migrations = True

    def normalize_email(self, email):
        return (email or "").strip().lower()

    def get_by_natural_key(self, email):
        return self.get(email__iexact=self.normalize_email(email))

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError(_('Users must have an email address'))

        email = self.normalize_email(email)
        user = self.model(email=email, **extra_fields)

        if password:
            user.set_password(password)
        else:
            user.set_unusable_password()

        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('is_active', True)
        extra_fields.setdefault('role', CustomUser.Role.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError(_('Superuser must have is_staff=True.'))
        if extra_fields.get('is_superuser') is not True:
            raise ValueError(_('Superuser must have is_superuser=True.'))

        return self.create_user(email, password, **extra_fields)


class CustomUser(AbstractUser):
    class Role(models.TextChoices):
        USER = "user", _("User")
        ADMIN = "admin", _("Admin")

    class PremiumPlan(models.TextChoices):
        NONE = "none", _("None")
        GOLD = "gold", _("Gold")
        PLATINUM = "platinum", _("Platinum")

    username = None
    first_name = None
    last_name = None

    email = models.EmailField(_('email address'), unique=True)
    name = models.CharField(_('name'), max_length=100)
    phone_number = models.CharField(_('phone number'), max_length=30, blank=True, default='')
    role = models.CharField(_('role'), max_length=10, choices=Role.choices, default=Role.USER)
    last_active = models.DateTimeField(_('last active'), default=timezone.now)

    # Display-only membership fields
    is_premium = models.BooleanField(_('premium'), default=False)
    premium_plan = models.CharField(max_length=10, choices=PremiumPlan.choices, default=PremiumPlan.NONE)
    premium_expiry = models.DateTimeField(null=True, blank=True)

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    objects = CustomUserManager()

    class Meta:
        ordering = ['-date_joined']

    def __str__(self):
        return self.email

    @property
    def is_admin(self):
        return self.role == self.Role.ADMIN

    def get_full_name(self):
        return self.name

    def get_short_name(self):
        return self.name

    def touch_last_active(self):
        self.last_active = timezone.now()
        self.save(update_fields=['last_active'])

import uuid

from django.contrib.auth.models import (
    AbstractBaseUser,
    BaseUserManager,
    PermissionsMixin,
)
from django.db import models
from django.utils import timezone


class UserManager(BaseUserManager):
    """Custom manager for the User model that uses email as the unique identifier."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError("Alamat e-mail wajib diisi.")
        email = self.normalize_email(email)
        extra_fields.setdefault("is_active", True)
        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault("role", User.Role.SUPER_ADMIN)
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)

        if extra_fields.get("is_staff") is not True:
            raise ValueError("Superuser harus memiliki is_staff=True.")
        if extra_fields.get("is_superuser") is not True:
            raise ValueError("Superuser harus memiliki is_superuser=True.")

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model for the financial tracking application.

    Uses email as the unique identifier instead of a username.
    The role decides which finance screens (income, expenses, payroll)
    the user may see or change.
    """

    class Role(models.TextChoices):
        SUPER_ADMIN = "SUPER_ADMIN", "Super admin"
        ADMIN = "ADMIN", "Admin"
        FINANCE_ADMIN = "FINANCE_ADMIN", "Admin keuangan"
        USER = "USER", "Pengguna"
        PUBLIC = "PUBLIC", "Publik"

    id = models.UUIDField(
        primary_key=True,
        default=uuid.uuid4,
        editable=False,
    )
    email = models.EmailField(
        "alamat e-mail",
        unique=True,
        error_messages={
            "unique": "Pengguna dengan alamat e-mail ini sudah ada.",
        },
    )
    first_name = models.CharField("nama depan", max_length=150)
    last_name = models.CharField("nama belakang", max_length=150, blank=True, default="")
    role = models.CharField(
        "peran",
        max_length=20,
        choices=Role.choices,
        default=Role.USER,
        db_index=True,
    )
    is_active = models.BooleanField("aktif", default=True, db_index=True)
    is_staff = models.BooleanField("staf", default=False)
    date_joined = models.DateTimeField("tanggal bergabung", default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["first_name"]

    class Meta:
        verbose_name = "pengguna"
        verbose_name_plural = "pengguna"
        ordering = ["first_name", "last_name"]

    def __str__(self):
        return self.get_full_name() or self.email

    def get_full_name(self):
        full_name = f"{self.first_name} {self.last_name}".strip()
        return full_name

    def get_short_name(self):
        return self.first_name

    # ------------------------------------------------------------------
    # Role helper properties
    # ------------------------------------------------------------------

    @property
    def is_super_admin(self):
        return self.is_superuser or self.role == self.Role.SUPER_ADMIN

    @property
    def is_finance_staff(self):
        return self.is_super_admin or self.role in (self.Role.ADMIN, self.Role.FINANCE_ADMIN)

    @property
    def can_manage_payroll(self):
        return self.is_super_admin or self.role == self.Role.FINANCE_ADMIN

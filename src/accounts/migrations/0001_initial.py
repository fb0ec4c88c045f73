import uuid

import django.utils.timezone
from django.db import migrations, models

import accounts.models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("auth", "0012_alter_user_first_name_max_length"),
    ]

    operations = [
        migrations.CreateModel(
            name="User",
            fields=[
                ("password", models.CharField(max_length=128, verbose_name="password")),
                ("last_login", models.DateTimeField(blank=True, null=True, verbose_name="last login")),
                (
                    "is_superuser",
                    models.BooleanField(
                        default=False,
                        help_text="Designates that this user has all permissions without explicitly assigning them.",
                        verbose_name="superuser status",
                    ),
                ),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                (
                    "email",
                    models.EmailField(
                        error_messages={"unique": "Pengguna dengan alamat e-mail ini sudah ada."},
                        max_length=254,
                        unique=True,
                        verbose_name="alamat e-mail",
                    ),
                ),
                ("first_name", models.CharField(max_length=150, verbose_name="nama depan")),
                ("last_name", models.CharField(blank=True, default="", max_length=150, verbose_name="nama belakang")),
                (
                    "role",
                    models.CharField(
                        choices=[
                            ("SUPER_ADMIN", "Super admin"),
                            ("ADMIN", "Admin"),
                            ("FINANCE_ADMIN", "Admin keuangan"),
                            ("USER", "Pengguna"),
                            ("PUBLIC", "Publik"),
                        ],
                        db_index=True,
                        default="USER",
                        max_length=20,
                        verbose_name="peran",
                    ),
                ),
                ("is_active", models.BooleanField(db_index=True, default=True, verbose_name="aktif")),
                ("is_staff", models.BooleanField(default=False, verbose_name="staf")),
                ("date_joined", models.DateTimeField(default=django.utils.timezone.now, verbose_name="tanggal bergabung")),
                (
                    "groups",
                    models.ManyToManyField(
                        blank=True,
                        help_text="The groups this user belongs to. A user will get all permissions granted to each of their groups.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.group",
                        verbose_name="groups",
                    ),
                ),
                (
                    "user_permissions",
                    models.ManyToManyField(
                        blank=True,
                        help_text="Specific permissions for this user.",
                        related_name="user_set",
                        related_query_name="user",
                        to="auth.permission",
                        verbose_name="user permissions",
                    ),
                ),
            ],
            options={
                "verbose_name": "pengguna",
                "verbose_name_plural": "pengguna",
                "ordering": ["first_name", "last_name"],
            },
            managers=[
                ("objects", accounts.models.UserManager()),
            ],
        ),
    ]

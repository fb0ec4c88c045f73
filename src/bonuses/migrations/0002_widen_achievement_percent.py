from decimal import Decimal

from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("bonuses", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="adminbonusrecap",
            name="achievement_percent",
            field=models.DecimalField(
                decimal_places=2, default=Decimal("0"), max_digits=20, verbose_name="persen pencapaian"
            ),
        ),
    ]

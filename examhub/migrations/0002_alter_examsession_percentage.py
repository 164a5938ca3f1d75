from django.db import migrations, models


class Migration(migrations.Migration):

    dependencies = [
        ("examhub", "0001_initial"),
    ]

    operations = [
        migrations.AlterField(
            model_name="examsession",
            name="percentage",
            field=models.DecimalField(
                blank=True,
                decimal_places=2,
                help_text="score / total_marks * 100. Kann 100 übersteigen, wenn total_marks kleiner als die Summe der Fragepunkte ist.",
                max_digits=9,
                null=True,
            ),
        ),
    ]

from django.core.management.base import BaseCommand
from places.models import Place


class Command(BaseCommand):
    help = "승인 대기 중인 모든 장소를 승인"

    def handle(self, *args, **options):
        updated = Place.objects.filter(is_approved=False).update(is_approved=True)
        self.stdout.write(self.style.SUCCESS(f"승인 완료: {updated}개 장소"))

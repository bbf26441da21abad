"""
Initial data: services and the default weekly schedule
"""
import logging

from sqlalchemy.orm import Session

from .models.service import Service
from .services.schedule import ScheduleService

logger = logging.getLogger(__name__)

INITIAL_SERVICES = [
    {
        "name": "Energy Healing",
        "name_fi": "Energiahoito",
        "name_en": "Energy Healing",
        "description_fi": "Kokonaisvaltainen hoito, joka auttaa tasapainottamaan kehon energiavirtauksia ja edistää hyvinvointia.",
        "description_en": "A holistic treatment that helps balance your body's energy flows and promotes overall wellbeing.",
        "duration_minutes": 60,
        "price": 75,
        "sort_order": 1
    },
    {
        "name": "Reiki Healing",
        "name_fi": "Reiki-hoito",
        "name_en": "Reiki Healing",
        "description_fi": "Perinteinen japanilainen energiahoito, joka edistää rentoutumista ja vähentää stressiä.",
        "description_en": "Traditional Japanese energy healing that promotes relaxation and reduces stress.",
        "duration_minutes": 60,
        "price": 75,
        "sort_order": 2
    },
    {
        "name": "Distance Healing",
        "name_fi": "Etähoito",
        "name_en": "Distance Healing",
        "description_fi": "Koe energiahoidon hyödyt oman kotisi mukavuudesta.",
        "description_en": "Experience the benefits of energy healing from the comfort of your own home.",
        "duration_minutes": 45,
        "price": 65,
        "sort_order": 3
    },
]


def init_default_services(db: Session) -> int:
    """Add the initial services if the table is empty"""
    existing = db.query(Service).count()
    if existing > 0:
        return 0

    for service_data in INITIAL_SERVICES:
        db.add(Service(currency="EUR", is_active=True, **service_data))
    db.commit()
    logger.info(f"Added {len(INITIAL_SERVICES)} services")
    return len(INITIAL_SERVICES)


def seed_database(db: Session):
    init_default_services(db)
    ScheduleService(db).init_default_schedule()

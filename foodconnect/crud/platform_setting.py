# foodconnect/crud/platform_setting.py
import json
from typing import Any, Dict

from sqlalchemy.orm import Session

from foodconnect.models.platform_setting import PlatformSetting


def get_all_settings(db: Session) -> Dict[str, Any]:
    """All stored settings as a dict of decoded values."""
    return {row.key: json.loads(row.value) for row in db.query(PlatformSetting).all()}

def upsert_settings(db: Session, values: Dict[str, Any], updated_by: int | None = None):
    for key, value in values.items():
        row = db.query(PlatformSetting).filter(PlatformSetting.key == key).first()
        if row is None:
            row = PlatformSetting(key=key)
            db.add(row)
        row.value = json.dumps(value)
        row.updated_by = updated_by
    db.commit()

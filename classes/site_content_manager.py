from models import db
from models.site_content import PrivacyPolicy, Promo, TermsConditions
from utils.errors import NotFoundError, ValidationError
from utils.helpers import sanitize_html

PROMO_FIELDS = ("title", "description", "image_url", "link", "is_active")


class SiteContentManager:
    """Privacy policy, terms & conditions and promos."""

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def _replace(self, model, content):
        if not content or not isinstance(content, str):
            raise ValidationError("Content is required")
        self.session.query(model).delete()
        record = model(content=sanitize_html(content))
        self.session.add(record)
        self.session.commit()
        return record

    def _latest(self, model):
        return self.session.query(model).order_by(model.created_at.desc(), model.id.desc()).first()

    def set_privacy_policy(self, content):
        return self._replace(PrivacyPolicy, content)

    def get_privacy_policy(self):
        return self._latest(PrivacyPolicy)

    def set_terms(self, content):
        return self._replace(TermsConditions, content)

    def get_terms(self):
        return self._latest(TermsConditions)

    # Promos

    def list_promos(self, active_only=False):
        query = self.session.query(Promo)
        if active_only:
            query = query.filter(Promo.is_active.is_(True))
        return query.order_by(Promo.created_at.desc(), Promo.id.desc()).all()

    def get_promo(self, promo_id):
        promo = self.session.get(Promo, promo_id)
        if promo is None:
            raise NotFoundError("Promo not found")
        return promo

    def create_promo(self, data):
        if not data.get("title"):
            raise ValidationError("Title is required")
        promo = Promo(
            title=data["title"],
            description=data.get("description"),
            image_url=data.get("image_url"),
            link=data.get("link"),
            is_active=bool(data.get("is_active", True)),
        )
        self.session.add(promo)
        self.session.commit()
        return promo

    def update_promo(self, promo_id, data):
        if "title" in data and not data.get("title"):
            raise ValidationError("Title is required")
        promo = self.get_promo(promo_id)
        for field in PROMO_FIELDS:
            if field in data:
                setattr(promo, field, bool(data[field]) if field == "is_active" else data[field])
        self.session.commit()
        return promo

    def delete_promo(self, promo_id):
        promo = self.get_promo(promo_id)
        self.session.delete(promo)
        self.session.commit()

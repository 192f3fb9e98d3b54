import logging
from typing import Dict, Optional, Tuple

from django.db import transaction

from business_hours.services import BusinessHoursService
from users.models import User

from .models import Establishment, EstablishmentAddress

logger = logging.getLogger(__name__)


class EstablishmentService:
    """Onboarding and profile changes of establishments."""

    @staticmethod
    @transaction.atomic
    def register(
        establishment_data: Dict,
        operator_data: Dict,
        address_data: Optional[Dict] = None,
    ) -> Tuple[Establishment, User]:
        """
        Create an establishment together with its first operator account.

        The new establishment opens every day from 08:00 to 18:00 until the
        operator saves its own hours.

        Args:
            establishment_data: Establishment model fields.
            operator_data: ``email``, ``password`` and optionally ``name`` /
                ``phone_number`` of the operator login.
            address_data: Optional EstablishmentAddress fields.
        """
        establishment = Establishment.objects.create(**establishment_data)

        operator = User.objects.create_user(
            role=User.Role.ESTABLISHMENT,
            establishment=establishment,
            **operator_data,
        )

        if address_data:
            EstablishmentAddress.objects.create(establishment=establishment, **address_data)

        BusinessHoursService(establishment).create_default_week()

        logger.info(f"Establishment {establishment.pk} registered with operator {operator.pk}")
        return establishment, operator

    @staticmethod
    def update_profile(establishment: Establishment, **changes) -> Establishment:
        """Apply profile changes; delivery fee changes apply to the next cart read."""
        old_policy = establishment.delivery_policy()

        for field, value in changes.items():
            setattr(establishment, field, value)
        establishment.save()

        new_policy = establishment.delivery_policy()
        if new_policy != old_policy:
            logger.info(
                f"Establishment {establishment.pk} delivery policy changed: "
                f"fee {old_policy.fee_amount} -> {new_policy.fee_amount}, "
                f"free from {old_policy.free_threshold} -> {new_policy.free_threshold}"
            )
        return establishment

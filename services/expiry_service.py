"""
Serviço para classificação de vencimentos
com limites configuráveis (crítico / alerta)
"""
import os
from datetime import date
from typing import Optional
from dotenv import load_dotenv
from schemas.inventory_schemas import ExpiryStatus

load_dotenv()


class ExpiryService:
    """Classifica pallets pelos dias restantes até o vencimento"""

    # Limites padrão (podem ser sobrescritos via .env)
    DIAS_CRITICO = int(os.getenv("EXPIRY_CRITICAL_DAYS", "5"))
    DIAS_ALERTA = int(os.getenv("EXPIRY_WARNING_DAYS", "30"))

    @staticmethod
    def days_until(expiration_date: date, today: Optional[date] = None) -> int:
        """Dias inteiros até o vencimento (negativo se já venceu)"""
        today = today or date.today()
        return (expiration_date - today).days

    @staticmethod
    def classify(expiration_date: date, today: Optional[date] = None) -> ExpiryStatus:
        """
        - CRITICAL: <= DIAS_CRITICO (inclui vencidos)
        - WARNING: <= DIAS_ALERTA
        - OK: demais
        """
        days = ExpiryService.days_until(expiration_date, today)
        if days <= ExpiryService.DIAS_CRITICO:
            return ExpiryStatus.CRITICAL
        if days <= ExpiryService.DIAS_ALERTA:
            return ExpiryStatus.WARNING
        return ExpiryStatus.OK

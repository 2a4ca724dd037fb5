"""
User-facing texts for plan denials, per locale.
"""

from typing import Dict, Optional

from config import settings

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "canceled": "Your subscription has been canceled. Reactivate it to keep using the system.",
        "read_only": "Your plan has expired. The system is in read-only mode.",
        "module_unavailable": 'The "{module}" module is not available in your current plan. Upgrade to access it.',
        "access_denied": "Access denied. Check your plan.",
        "patient_limit": "You have reached the patient limit of your plan. Upgrade to register more.",
        "professional_limit": "You have reached the professional limit of your plan.",
    },
    "pt-BR": {
        "canceled": "Sua assinatura foi cancelada. Reative para continuar usando o sistema.",
        "read_only": "Seu plano expirou. O sistema está em modo somente leitura.",
        "module_unavailable": 'O módulo "{module}" não está disponível no seu plano atual. Faça upgrade para acessar.',
        "access_denied": "Acesso negado. Verifique seu plano.",
        "patient_limit": "Você atingiu o limite de pacientes do seu plano. Faça upgrade para cadastrar mais.",
        "professional_limit": "Você atingiu o limite de profissionais do seu plano.",
    },
}


def render(key: str, locale: Optional[str] = None, **params: str) -> str:
    return MESSAGES[settings.resolve_locale(locale or settings.MESSAGE_LOCALE)][key].format(**params)

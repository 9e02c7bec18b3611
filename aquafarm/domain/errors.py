# aquafarm/domain/errors.py
"""
Erros de domínio.

Todas as falhas do núcleo são locais e síncronas: propagam para quem chamou
e nunca são tratadas dentro do domínio, com uma exceção documentada
(`MissingWaterQualityError` no consolidado da fazenda).
"""


class DomainError(Exception):
    """Base para erros do domínio aquícola."""
    pass


class ValidationError(DomainError, ValueError):
    """Valor inválido na construção (id vazio, faixa física, peso negativo...)."""
    pass


class PreconditionError(DomainError):
    """Operação não permitida no estado atual ou com denominador não positivo."""
    pass


class EntityNotFoundError(PreconditionError):
    """Lote ou tanque não pertence ao agregado."""
    pass


class MissingWaterQualityError(PreconditionError):
    """Tanque sem leitura de qualidade da água para o cálculo de ração."""
    pass


class FishTypeNotFoundError(DomainError, LookupError):
    """Parâmetros da espécie ausentes no catálogo."""
    pass

"""
Utilidades de seguridad: generación de credenciales para identidades nuevas.
"""
import secrets
import string


MIN_PASSWORD_LENGTH = 12
PASSWORD_SYMBOLS = "!@#$%^&*()-_=+"

_CHARSETS = (
    string.ascii_lowercase,
    string.ascii_uppercase,
    string.digits,
    PASSWORD_SYMBOLS,
)


class SecurityService:
    """Servicio para operaciones de seguridad."""

    @staticmethod
    def generate_password(length: int = 20) -> str:
        """
        Genera una contraseña aleatoria para un usuario nuevo.

        Incluye al menos un caracter de cada grupo (minúscula, mayúscula,
        dígito, símbolo). La contraseña no se guarda ni se loguea en ningún lado:
        el usuario entra con el flujo de "olvidé mi contraseña".

        Args:
            length: Largo deseado (mínimo MIN_PASSWORD_LENGTH)

        Returns:
            str: Contraseña generada
        """
        length = max(length, MIN_PASSWORD_LENGTH)
        chars = [secrets.choice(charset) for charset in _CHARSETS]
        alphabet = "".join(_CHARSETS)
        chars.extend(secrets.choice(alphabet) for _ in range(length - len(chars)))
        secrets.SystemRandom().shuffle(chars)
        return "".join(chars)

from functools import wraps

from logitrack.core.exceptions import AuthenticationException


def check_authentication(func):
    """
      Decoratore per verificare se un utente è autenticato prima di permettere l'accesso a una funzione.

      Se l'argomento keyword 'user' manca o è None solleva AuthenticationException (401),
      altrimenti esegue la funzione originale.

      Utilizzo:
          Decorare gli endpoint FastAPI che richiedono autenticazione, con 'user'
          ottenuto da Depends(get_current_user).
      """

    @wraps(func)
    async def wrapper(*args, **kwargs):
        user = kwargs.get('user', None)

        if user is None:
            raise AuthenticationException("User not authenticated")

        return await func(*args, **kwargs)

    return wrapper

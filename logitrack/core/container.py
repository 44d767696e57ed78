"""
Container di dependency injection: interfacce -> implementazioni.

Repository e servizi sono transient e ricevono la Session della richiesta;
le istanze registrate (es. lo storage dei documenti) sono condivise.
"""
import inspect
import logging
from typing import TypeVar, Dict, Any, Type

logger = logging.getLogger(__name__)

T = TypeVar('T')


class Container:

    def __init__(self):
        self._transients: Dict[str, Type] = {}
        self._instances: Dict[str, Any] = {}

    def register_transient(self, interface: Type[T], implementation: Type[T]):
        """Nuova istanza di `implementation` a ogni risoluzione"""
        self._transients[self._get_key(interface)] = implementation

    def register_instance(self, interface: Type[T], instance: T):
        self._instances[self._get_key(interface)] = instance

    def is_registered(self, interface) -> bool:
        if not isinstance(interface, type):
            return False
        key = self._get_key(interface)
        return key in self._transients or key in self._instances

    def resolve_with_session(self, interface: Type[T], session) -> T:
        """
        Risolve `interface` costruendo ricorsivamente le dipendenze del costruttore.

        I parametri chiamati ``session`` ricevono la Session passata; gli altri
        vengono risolti dalla loro annotazione di tipo o lasciati al default.
        """
        key = self._get_key(interface)
        if key in self._instances:
            return self._instances[key]
        if key in self._transients:
            return self._create_instance(self._transients[key], session)
        raise ValueError(f"Cannot resolve {interface.__name__}: No registration found")

    def _get_key(self, interface: Type[T]) -> str:
        return interface.__name__

    def _create_instance(self, implementation: Type[T], session) -> T:
        kwargs = {}
        for param_name, param in inspect.signature(implementation.__init__).parameters.items():
            if param_name in ('self', 'args', 'kwargs'):
                continue
            if param_name == 'session':
                kwargs[param_name] = session
                continue

            param_type = param.annotation
            if param_type is not inspect.Parameter.empty and self.is_registered(param_type):
                kwargs[param_name] = self.resolve_with_session(param_type, session)
            elif param.default is not inspect.Parameter.empty:
                kwargs[param_name] = param.default
            else:
                raise ValueError(
                    f"Cannot resolve parameter {param_name} of {implementation.__name__}"
                )

        return implementation(**kwargs)


container = Container()

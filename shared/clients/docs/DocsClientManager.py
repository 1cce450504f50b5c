from shared.helper.HelperConfig import HelperConfig
from shared.clients.docs.DocsClientInterface import DocsClientInterface

DEFAULT_DOCS_ENGINE = "quip"


class DocsClientManager:
    """
    Picks the docs backend named by DOCS_ENGINE and builds its client.

    An engine "foo" lives in shared/clients/docs/foo/DocsClientFoo.py and defines the class
    DocsClientFoo. Adding a backend therefore needs no change here.
    """

    def __init__(self, helper_config: HelperConfig):
        self.helper_config = helper_config
        self.logging = helper_config.get_logger()
        self.client = self._initialize_client()

    def _get_engine_from_env(self) -> str:
        """
        Returns the engine name in lower case (e.g. "quip"). Surrounding blanks and case are ignored.

        Raises:
            ValueError: If DOCS_ENGINE is set but blank.
        """
        engine = self.helper_config.get_string_val("DOCS_ENGINE", default=DEFAULT_DOCS_ENGINE).strip().lower()
        if not engine:
            raise ValueError("DOCS_ENGINE is set but empty; leave it unset for the default Quip backend.")
        return engine

    def _initialize_client(self) -> DocsClientInterface:
        """
        Imports the engine's client module and constructs the client with the shared config.

        Raises:
            ValueError: If no client module or class exists for the engine.
        """
        engine = self._get_engine_from_env()
        class_name = f"DocsClient{engine.capitalize()}"
        module_path = f"shared.clients.docs.{engine}.{class_name}"
        try:
            module = __import__(module_path, fromlist=[class_name])
            client_class = getattr(module, class_name)
        except (ImportError, AttributeError) as e:
            raise ValueError(f"Unsupported docs engine '{engine}': no {class_name} in {module_path} ({e})")
        client = client_class(helper_config=self.helper_config)
        self.logging.debug("Docs engine '%s' resolved to %s", engine, class_name)
        return client

    def get_client(self) -> DocsClientInterface:
        return self.client

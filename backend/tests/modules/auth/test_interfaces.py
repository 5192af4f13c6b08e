from modules.auth.interfaces import ISessionVerifier
from modules.auth.service import SessionTokenVerifier


class TestSessionVerifierInterface:
    METHODS = ["validate_token", "extract_token", "verify"]

    def test_interface_methods_exist(self):
        """ISessionVerifier should define required methods."""
        for method in self.METHODS:
            assert hasattr(ISessionVerifier, method)

    def test_verifier_has_interface_methods(self):
        """SessionTokenVerifier should have all ISessionVerifier methods."""
        for method in self.METHODS:
            assert hasattr(SessionTokenVerifier, method)
            assert callable(getattr(SessionTokenVerifier, method))

    def test_instance_satisfies_protocol(self, test_settings):
        """A configured verifier should pass the runtime protocol check."""
        assert isinstance(SessionTokenVerifier(test_settings), ISessionVerifier)

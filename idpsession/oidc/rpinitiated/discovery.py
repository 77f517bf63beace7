from idpsession.common.security import is_secure_transport


class OpenIDProviderMetadata(dict):
    """Provider metadata of RP-Initiated Logout and Front-Channel Logout."""

    REGISTRY_KEYS = [
        "end_session_endpoint",
        "frontchannel_logout_supported",
        "frontchannel_logout_session_supported",
    ]

    def validate(self):
        for key in self.REGISTRY_KEYS:
            getattr(self, f"validate_{key}")()

    def validate_end_session_endpoint(self):
        """Validate the end_session_endpoint parameter.

        OPTIONAL. URL at the OP to which an RP can perform a redirect to
        request that the End-User be logged out at the OP.

        This URL MUST use the "https" scheme and MAY contain port, path, and
        query parameter components.
        """
        url = self.get("end_session_endpoint")
        if url and not is_secure_transport(url):
            raise ValueError('"end_session_endpoint" MUST use "https" scheme')

    def validate_frontchannel_logout_supported(self):
        """OPTIONAL. Boolean value specifying whether the OP supports HTTP-based
        logout, with true indicating support.
        """
        _validate_boolean_value(self, "frontchannel_logout_supported")

    def validate_frontchannel_logout_session_supported(self):
        """OPTIONAL. Boolean value specifying whether the OP can pass ``iss``
        and ``sid`` query parameters to identify the RP session with the OP
        when the frontchannel_logout_uri is used. It only makes sense
        together with frontchannel_logout_supported.
        """
        _validate_boolean_value(self, "frontchannel_logout_session_supported")
        if self.get("frontchannel_logout_session_supported") and not self.get(
            "frontchannel_logout_supported"
        ):
            raise ValueError(
                '"frontchannel_logout_session_supported" requires '
                '"frontchannel_logout_supported"'
            )

    @property
    def frontchannel_logout_supported(self):
        # If omitted, the default value is false.
        return self.get("frontchannel_logout_supported", False)

    @property
    def frontchannel_logout_session_supported(self):
        # If omitted, the default value is false.
        return self.get("frontchannel_logout_session_supported", False)


def _validate_boolean_value(metadata, key):
    if key not in metadata:
        return
    if metadata[key] not in (True, False):
        raise ValueError(f'"{key}" MUST be boolean')

from __future__ import annotations

from django.utils.deprecation import MiddlewareMixin


class ContentSecurityPolicyMiddleware(MiddlewareMixin):
    """Add a basic Content-Security-Policy header.

    The policy forbids inline scripts. Chart data reaches the dashboard
    script through a `json_script` block, which is not executable and so
    stays within the policy.
    """

    def process_response(self, request, response):  # noqa: D401
        style_src = "'self'"

        # The API docs pull their stylesheets from the CDN and inject inline styles
        if request.path in ("/docs/", "/redoc/"):
            style_src = "'self' 'unsafe-inline' https://cdn.jsdelivr.net"

        csp = (
            "default-src 'self'; "
            "img-src 'self' data:; "
            "script-src 'self' https://cdn.jsdelivr.net; "
            f"style-src {style_src}; "
            "connect-src 'self'; "
            "frame-ancestors 'none'"
        )
        response["Content-Security-Policy"] = csp
        return response

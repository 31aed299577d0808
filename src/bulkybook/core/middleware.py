"""Core middleware for BulkyBook."""

import logging

from django.conf import settings
from django.core.exceptions import PermissionDenied
from django.http import Http404
from django.shortcuts import redirect

from bulkybook.data import UnitOfWork
from bulkybook.host import get_services

logger = logging.getLogger(__name__)

ERROR_PAGE_URL = "/customer/home/error"


class ExceptionHandlerMiddleware:
    """Redirect unhandled view errors to the generic error page.

    Only active when DEBUG is off; in development Django's debug page is shown.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        return self.get_response(request)

    def process_exception(self, request, exception):
        if settings.DEBUG or isinstance(exception, (Http404, PermissionDenied)):
            return None

        logger.exception(f"Unhandled error on {request.method} {request.path}: {exception}")
        if request.path == ERROR_PAGE_URL:
            return None
        return redirect(ERROR_PAGE_URL)


class RequestServicesMiddleware:
    """Attach the service graph and a fresh unit of work to each request.

    Sets request.services and request.unit_of_work.
    """

    def __init__(self, get_response):
        self.get_response = get_response

    def __call__(self, request):
        request.services = get_services()
        request.unit_of_work = UnitOfWork()

        response = self.get_response(request)

        if request.unit_of_work.has_changes:
            logger.warning(f"Discarding unsaved changes after {request.method} {request.path}")
        request.unit_of_work.discard()
        return response

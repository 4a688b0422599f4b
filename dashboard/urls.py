"""
URL configuration for dashboard project.
"""
from django.urls import path

from orders.api.views import graphql_view

urlpatterns = [
    path('graphql/', graphql_view, name='graphql'),
]

from django.urls import path
from crm.search.leads_api import search_leads

urlpatterns = [
    path("search/leads", search_leads, name="search-leads"),
]

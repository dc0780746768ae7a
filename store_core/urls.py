from django.urls import path, include

urlpatterns = [
    path('api/git/', include('git_store.urls', namespace='git_store')),
]

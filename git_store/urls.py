from django.urls import path
from . import views


app_name = 'git_store'

urlpatterns = [
    path('repos', views.create_repo, name='create_repo'),
    path('<str:repo_name>/push', views.push_objects, name='push_objects'),
    path('<str:repo_name>/objects', views.objects, name='objects'),
    path('<str:repo_name>/objects/<str:hash>', views.object_detail, name='object_detail'),
    path('<str:repo_name>/refs', views.refs, name='refs'),
    path('<str:repo_name>/refs/<path:name>', views.ref_detail, name='ref_detail'),
    path('<str:repo_name>/resolve', views.resolve, name='resolve'),
    path('<str:repo_name>/default-branch', views.default_branch, name='default_branch'),
    path('<str:repo_name>/ownership/transfer', views.ownership_transfer, name='ownership_transfer'),
    path('<str:repo_name>/ownership/accept', views.ownership_accept, name='ownership_accept'),
]

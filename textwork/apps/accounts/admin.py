from django.contrib import admin

from .models import UserGroup


@admin.register(UserGroup)
class UserGroupAdmin(admin.ModelAdmin):
    list_display = ("name", "nickname", "created_at")
    search_fields = ("name", "nickname")
    prepopulated_fields = {"nickname": ("name",)}

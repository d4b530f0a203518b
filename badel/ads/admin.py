from django.contrib import admin, messages
from rest_framework.exceptions import APIException

from .models import Ad, MarketPrices
from .moderation import approve_ad, reject_ad
from .snapshot import publish_change_on_commit


def _moderate(modeladmin, request, queryset, apply, label):
    done = 0
    for ad_id in queryset.values_list('pk', flat=True):
        try:
            apply(request.user, ad_id)
        except APIException as exc:
            modeladmin.message_user(request, f"Ad {ad_id}: {exc.detail}", level=messages.WARNING)
        else:
            done += 1
    modeladmin.message_user(request, f"{done} ad(s) {label}.")


@admin.action(description="Approve selected ads")
def approve_ads(modeladmin, request, queryset):
    _moderate(modeladmin, request, queryset, approve_ad, "approved")


@admin.action(description="Approve selected ads as featured")
def approve_ads_featured(modeladmin, request, queryset):
    _moderate(modeladmin, request, queryset,
              lambda actor, ad_id: approve_ad(actor, ad_id, featured=True), "approved as featured")


@admin.action(description="Reject selected ads")
def reject_ads(modeladmin, request, queryset):
    _moderate(modeladmin, request, queryset, reject_ad, "rejected")


@admin.register(Ad)
class AdAdmin(admin.ModelAdmin):
    list_display = (
        'id', 'title', 'category', 'sub_category', 'status',
        'is_featured', 'owner', 'views', 'created_at'
    )
    list_filter = (
        'status',
        'category',
        'is_featured',
        'created_at',  # date filter sidebar (Today / Past 7 days / etc.)
    )
    date_hierarchy = 'created_at'
    search_fields = ('id', 'title', 'location', 'description', 'owner__email')
    autocomplete_fields = ('owner',)
    readonly_fields = ('views', 'contact_clicks', 'created_at', 'updated_at')
    ordering = ('-created_at',)
    list_select_related = ('owner',)
    actions = (approve_ads, approve_ads_featured, reject_ads)

    # Edits made here bypass the moderation module; publish the change once committed.
    def save_model(self, request, obj, form, change):
        super().save_model(request, obj, form, change)
        publish_change_on_commit(f"admin-site-save:{obj.pk}")

    def delete_model(self, request, obj):
        pk = obj.pk
        super().delete_model(request, obj)
        publish_change_on_commit(f"admin-site-delete:{pk}")

    def delete_queryset(self, request, queryset):
        super().delete_queryset(request, queryset)
        publish_change_on_commit("admin-site-bulk-delete")


@admin.register(MarketPrices)
class MarketPricesAdmin(admin.ModelAdmin):
    list_display = ('id', 'gold_ounce', 'gold_lira', 'silver_ounce', 'dollar_rate', 'updated_by', 'updated_at')
    readonly_fields = ('updated_at',)

from django.db.models import Q
from django_filters import rest_framework as df

from ..models import Ad


class AdminAdFilter(df.FilterSet):
    """Moderator-side filters over every ad, whatever its status."""
    status = df.ChoiceFilter(field_name='status', choices=Ad.Status.choices, label='Status')
    category = df.ChoiceFilter(field_name='category', choices=Ad.Category.choices, label='Category')
    sub_category = df.CharFilter(field_name='sub_category', lookup_expr='iexact', label='Sub-category (exact)')
    owner = df.NumberFilter(field_name='owner_id', label='Owner id')
    featured = df.BooleanFilter(field_name='is_featured', label='Featured')
    created_from = df.DateFilter(field_name='created_at', lookup_expr='date__gte', label='Created from (YYYY-MM-DD)')
    created_to = df.DateFilter(field_name='created_at', lookup_expr='date__lte', label='Created to (YYYY-MM-DD)')

    q = df.CharFilter(method='filter_q', label='Search')

    def filter_q(self, queryset, name, value):
        terms = [t.strip() for t in (value or "").split() if t.strip()]
        for term in terms:
            queryset = queryset.filter(
                Q(title__icontains=term) |
                Q(description__icontains=term) |
                Q(location__icontains=term) |
                Q(owner__email__icontains=term)
            )
        return queryset

    class Meta:
        model = Ad
        fields = [
            'q', 'status', 'category', 'sub_category',
            'owner', 'featured',
            'created_from', 'created_to',
        ]

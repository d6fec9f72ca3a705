"""
Patient Profile Tests
Model helpers and the read-only profile API
"""

import pytest
from django.urls import reverse
from rest_framework import status

from apps.patients.models import PatientProfile


def make_profile(user_id, **overrides):
    values = {
        'user_id': user_id,
        'preferred_language': 'en',
        'name': 'Ramesh Kumar',
        'age': 55,
        'gender': 'male',
        'emergency_contact': '+919876543210',
        'pincode': '560001',
        'consent_given': True,
        'diabetes_type': 'type_2',
        'diabetes_duration_years': 5.0,
        'medication_type': 'tablets',
        'medicines': ['Metformin'],
        'diet_preference': 'vegetarian',
        'comorbidities': ['None'],
        'last_hba1c': 7.2,
        'completed': True,
    }
    values.update(overrides)
    return PatientProfile.objects.create(**values)


@pytest.mark.django_db
class TestPatientProfileModel:

    def test_insulin_and_comorbidity_helpers(self):
        tablets = make_profile('+919800000010')
        insulin = make_profile('+919800000011', medication_type='both', comorbidities=['Thyroid'])

        assert tablets.is_on_insulin is False
        assert tablets.has_comorbidities is False
        assert insulin.is_on_insulin is True
        assert insulin.has_comorbidities is True
        assert str(tablets) == 'Ramesh Kumar (+919800000010)'


@pytest.mark.django_db
class TestPatientProfileAPI:

    def test_requires_authentication(self, api_client):
        response = api_client.get(reverse('patients:profile-list'))
        assert response.status_code in (status.HTTP_401_UNAUTHORIZED, status.HTTP_403_FORBIDDEN)

    def test_list_and_detail(self, staff_client):
        profile = make_profile('+919800000010')

        response = staff_client.get(reverse('patients:profile-list'))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['count'] == 1

        response = staff_client.get(reverse('patients:profile-detail', kwargs={'pk': profile.pk}))
        assert response.status_code == status.HTTP_200_OK
        assert response.data['diabetes_type_display'] == 'Type 2'
        assert response.data['medicines'] == ['Metformin']

    def test_filters(self, staff_client):
        make_profile('+919800000010')
        make_profile('+919800000011', name='Sita Devi', diabetes_type='type_1',
                     medication_type='insulin', preferred_language='hi')
        make_profile('+919800000012', name='Anil', completed=False)

        url = reverse('patients:profile-list')
        assert staff_client.get(url, {'diabetes_type': 'type_1'}).data['count'] == 1
        assert staff_client.get(url, {'preferred_language': 'hi'}).data['count'] == 1
        assert staff_client.get(url, {'medication_type': 'tablets'}).data['count'] == 2
        assert staff_client.get(url, {'completed': 'false'}).data['count'] == 1
        assert staff_client.get(url, {'search': 'Sita'}).data['count'] == 1
        assert staff_client.get(url, {'search': '0000012'}).data['count'] == 1

    def test_read_only(self, staff_client):
        response = staff_client.post(reverse('patients:profile-list'), {'user_id': 'x'}, format='json')
        assert response.status_code == status.HTTP_405_METHOD_NOT_ALLOWED

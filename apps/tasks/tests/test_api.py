"""
Integration tests for the /tasks endpoints.
Tests ownership rules, validation, pagination and partial updates.
"""
import json
from uuid import uuid4

from django.test import TestCase, Client
from django.utils import timezone

from apps.identity.models import UserRole
from apps.identity.tests.helpers import auth_header, make_user
from apps.tasks.models import Task, TaskStatus


class TaskCreateAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = make_user(name='Owner', email='owner@test.com')

    def post(self, payload, user=None):
        return self.client.post(
            '/api/v1/tasks',
            data=json.dumps(payload),
            content_type='application/json',
            **auth_header(user or self.user),
        )

    def test_create_task_defaults_to_pending(self):
        response = self.post({'title': 'Write tests'})
        self.assertEqual(response.status_code, 201)

        data = response.json()
        self.assertEqual(data['message'], 'Task created successfully')
        task = data['data']['task']
        self.assertEqual(task['title'], 'Write tests')
        self.assertEqual(task['status'], 'PENDING')
        self.assertIsNone(task['description'])
        self.assertEqual(task['user'], {
            'id': str(self.user.id),
            'name': 'Owner',
            'email': 'owner@test.com',
        })

    def test_create_task_with_status(self):
        response = self.post({'title': 'Ship it', 'description': 'Release v1', 'status': 'IN_PROGRESS'})
        self.assertEqual(response.status_code, 201)

        task = Task.objects.get()
        self.assertEqual(task.status, TaskStatus.IN_PROGRESS)
        self.assertEqual(task.description, 'Release v1')
        self.assertEqual(task.owner, self.user)

    def test_title_too_short(self):
        response = self.post({'title': 'ab'})
        self.assertEqual(response.status_code, 400)

        data = response.json()
        self.assertFalse(data['success'])
        self.assertEqual(data['errors'], [
            {'field': 'title', 'message': 'Title must be between 3 and 100 characters'},
        ])
        self.assertFalse(Task.objects.exists())

    def test_all_violations_reported(self):
        response = self.post({'title': 'x' * 101, 'description': 'd' * 501, 'status': 'DONE'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual([e['field'] for e in response.json()['errors']], ['title', 'description', 'status'])

    def test_requires_token(self):
        response = self.client.post(
            '/api/v1/tasks',
            data=json.dumps({'title': 'Anonymous'}),
            content_type='application/json',
        )
        self.assertEqual(response.status_code, 401)
        self.assertFalse(Task.objects.exists())

    def test_malformed_json(self):
        response = self.client.post(
            '/api/v1/tasks',
            data='{"title": ',
            content_type='application/json',
            **auth_header(self.user),
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()['success'])


class TaskListAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.user = make_user()
        self.other = make_user()
        for i in range(12):
            Task.objects.create(
                title=f'Task {i}',
                owner=self.user,
                status=TaskStatus.COMPLETED if i % 3 == 0 else TaskStatus.PENDING,
            )
        self.foreign = Task.objects.create(title='Not yours', owner=self.other)

    def get(self, query='', user=None):
        return self.client.get(f'/api/v1/tasks{query}', **auth_header(user or self.user))

    def test_default_page(self):
        response = self.get()
        self.assertEqual(response.status_code, 200)

        data = response.json()['data']
        self.assertEqual(len(data['tasks']), 10)
        self.assertEqual(data['pagination'], {
            'currentPage': 1,
            'totalPages': 2,
            'totalTasks': 12,
            'limit': 10,
        })

    def test_only_own_tasks(self):
        ids = {t['id'] for t in self.get('?limit=100').json()['data']['tasks']}
        self.assertNotIn(str(self.foreign.id), ids)
        self.assertEqual(len(ids), 12)

        other_ids = [t['id'] for t in self.get(user=self.other).json()['data']['tasks']]
        self.assertEqual(other_ids, [str(self.foreign.id)])

    def test_admin_lists_only_own_tasks(self):
        admin = make_user(role=UserRole.ADMIN)
        response = self.get(user=admin)
        self.assertEqual(response.json()['data']['tasks'], [])

    def test_status_filter(self):
        data = self.get('?status=COMPLETED').json()['data']
        self.assertEqual(data['pagination']['totalTasks'], 4)
        self.assertTrue(all(t['status'] == 'COMPLETED' for t in data['tasks']))

    def test_newest_first(self):
        ids = [t['id'] for t in self.get('?limit=3').json()['data']['tasks']]
        expected = Task.objects.filter(owner=self.user).order_by('-created_at', '-id')[:3]
        self.assertEqual(ids, [str(t.id) for t in expected])

    def test_pages_do_not_overlap(self):
        Task.objects.filter(owner=self.user).update(created_at=timezone.now())

        seen = []
        for page in (1, 2, 3):
            seen += [t['id'] for t in self.get(f'?page={page}&limit=5').json()['data']['tasks']]
        self.assertEqual(len(seen), 12)
        self.assertEqual(len(set(seen)), 12)

    def test_page_beyond_range_is_empty(self):
        response = self.get('?page=5&limit=5')
        self.assertEqual(response.status_code, 200)

        data = response.json()['data']
        self.assertEqual(data['tasks'], [])
        self.assertEqual(data['pagination']['totalPages'], 3)

    def test_non_numeric_paging_falls_back_to_defaults(self):
        pagination = self.get('?page=abc&limit=xyz').json()['data']['pagination']
        self.assertEqual(pagination['currentPage'], 1)
        self.assertEqual(pagination['limit'], 10)

    def test_limit_is_not_capped(self):
        data = self.get('?limit=1000').json()['data']
        self.assertEqual(len(data['tasks']), 12)
        self.assertEqual(data['pagination']['totalPages'], 1)

    def test_huge_page_is_empty(self):
        response = self.get('?page=99999999999999999999')
        self.assertEqual(response.status_code, 200)

        data = response.json()['data']
        self.assertEqual(data['tasks'], [])
        self.assertEqual(data['pagination']['totalTasks'], 12)

    def test_huge_limit_returns_everything(self):
        response = self.get('?limit=99999999999999999999')
        self.assertEqual(response.status_code, 200)

        data = response.json()['data']
        self.assertEqual(len(data['tasks']), 12)
        self.assertEqual(data['pagination']['totalPages'], 1)


class TaskDetailAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.owner = make_user()
        self.stranger = make_user()
        self.admin = make_user(role=UserRole.ADMIN)
        self.task = Task.objects.create(title='Owned task', owner=self.owner)

    def test_owner_can_view(self):
        response = self.client.get(f'/api/v1/tasks/{self.task.id}', **auth_header(self.owner))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['data']['task']['user']['id'], str(self.owner.id))

    def test_admin_can_view_any_task(self):
        response = self.client.get(f'/api/v1/tasks/{self.task.id}', **auth_header(self.admin))
        self.assertEqual(response.status_code, 200)

    def test_stranger_is_forbidden(self):
        response = self.client.get(f'/api/v1/tasks/{self.task.id}', **auth_header(self.stranger))
        self.assertEqual(response.status_code, 403)

    def test_missing_task(self):
        response = self.client.get(f'/api/v1/tasks/{uuid4()}', **auth_header(self.owner))
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json()['message'], 'Task not found')


class TaskUpdateAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.owner = make_user()
        self.admin = make_user(role=UserRole.ADMIN)
        self.task = Task.objects.create(title='Original title', description='Original description', owner=self.owner)

    def put(self, payload, user=None, task_id=None):
        return self.client.put(
            f'/api/v1/tasks/{task_id or self.task.id}',
            data=json.dumps(payload),
            content_type='application/json',
            **auth_header(user or self.owner),
        )

    def test_status_only_update(self):
        response = self.put({'status': 'COMPLETED'})
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Task updated successfully')

        self.task.refresh_from_db()
        self.assertEqual(self.task.status, TaskStatus.COMPLETED)
        self.assertEqual(self.task.title, 'Original title')
        self.assertEqual(self.task.description, 'Original description')

    def test_empty_title_is_ignored(self):
        response = self.put({'title': '', 'description': 'New description'})
        self.assertEqual(response.status_code, 200)

        task = response.json()['data']['task']
        self.assertEqual(task['title'], 'Original title')
        self.assertEqual(task['description'], 'New description')

    def test_invalid_status(self):
        response = self.put({'status': 'ARCHIVED'})
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()['errors'][0]['field'], 'status')

    def test_admin_cannot_update_others_task(self):
        response = self.put({'title': 'Hijacked'}, user=self.admin)
        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json()['message'], 'Not authorized to update this task')

        self.task.refresh_from_db()
        self.assertEqual(self.task.title, 'Original title')

    def test_missing_task(self):
        response = self.put({'title': 'Anything'}, task_id=uuid4())
        self.assertEqual(response.status_code, 404)


class TaskDeleteAPITest(TestCase):

    def setUp(self):
        self.client = Client()
        self.owner = make_user()
        self.admin = make_user(role=UserRole.ADMIN)
        self.task = Task.objects.create(title='Disposable', owner=self.owner)

    def test_owner_deletes(self):
        response = self.client.delete(f'/api/v1/tasks/{self.task.id}', **auth_header(self.owner))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()['message'], 'Task deleted successfully')
        self.assertNotIn('data', response.json())
        self.assertFalse(Task.objects.filter(id=self.task.id).exists())

    def test_admin_cannot_delete_others_task(self):
        response = self.client.delete(f'/api/v1/tasks/{self.task.id}', **auth_header(self.admin))
        self.assertEqual(response.status_code, 403)
        self.assertTrue(Task.objects.filter(id=self.task.id).exists())

    def test_missing_task(self):
        response = self.client.delete(f'/api/v1/tasks/{uuid4()}', **auth_header(self.owner))
        self.assertEqual(response.status_code, 404)

"""
Tests for the API endpoints.
"""

import io

import pytest

from fib_study.errors import PersistenceError
from fib_study.web import api


VALID_CSV = (
    "Title,Content,Text,Type\n"
    "Passage #2,Birds (Answer: fly) south.,fly: move through air,RFIB\n"
    "Passage #1,The cat (Answer: sat) down.,sat: past of sit,\n"
    ",missing title,t,RWFIB\n"
)


def question_payload(count: int):
    return [
        {'title': f"Q #{i}", 'type': 'RWFIB', 'content': 'passage', 'text': 'explanation',
         'id': f"tmp-{i}"}
        for i in range(1, count + 1)
    ]


def test_health_check(client):
    response = client.get('/api/health')

    assert response.status_code == 200
    assert response.get_json()['status'] == 'ok'


class TestImportEndpoint:

    def test_import_csv(self, client):
        response = client.post('/api/questions/import', data={
            'file': (io.BytesIO(VALID_CSV.encode('utf-8')), 'questions.csv')
        }, content_type='multipart/form-data')

        assert response.status_code == 200
        data = response.get_json()
        assert data['success'] is True
        assert [q['title'] for q in data['data']['questions']] == ["Passage #2", "Passage #1"]
        assert data['data']['questions'][1]['type'] == "RWFIB"
        assert data['data']['errors'] == ["Row 3: Missing title"]
        assert data['data']['summary'] == {'total': 3, 'valid': 2, 'rejected': 1}

    def test_import_does_not_write(self, client, store):
        client.post('/api/questions/import', data={
            'file': (io.BytesIO(VALID_CSV.encode('utf-8')), 'questions.csv')
        }, content_type='multipart/form-data')

        assert store.count("questions") == 0

    def test_missing_file(self, client):
        response = client.post('/api/questions/import', data={},
                               content_type='multipart/form-data')

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'MISSING_FILE'

    def test_non_csv_file(self, client):
        response = client.post('/api/questions/import', data={
            'file': (io.BytesIO(b"data"), 'questions.xlsx')
        }, content_type='multipart/form-data')

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == "Please upload a CSV file"
        assert data['error_code'] == 'IMPORT_FAILED'

    def test_no_valid_rows(self, client):
        content = b"title,content,text,type\n,c,t,RFIB\n"
        response = client.post('/api/questions/import', data={
            'file': (io.BytesIO(content), 'questions.csv')
        }, content_type='multipart/form-data')

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == "No valid questions found:\nRow 1: Missing title"
        assert data['row_errors'] == {'1': ["Missing title"]}


class TestReviewEndpoint:

    def test_review_page_and_errors(self, client):
        questions = question_payload(12)
        questions[11]['text'] = ""

        response = client.post('/api/questions/review', json={'questions': questions, 'page': 2})

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['valid'] is False
        assert data['validation_errors'] == {'11': ["Text is required"]}
        assert (data['page'], data['total_pages'], data['start'], data['end']) == (2, 2, 11, 12)
        assert data['rows'][1]['status'] == "Text is required"

    def test_review_requires_question_list(self, client):
        response = client.post('/api/questions/review', json={'page': 1})

        assert response.status_code == 400
        assert response.get_json()['error_code'] == 'INVALID_JSON'


class TestSubmitEndpoint:

    def test_submit_and_progress(self, client, store):
        response = client.post('/api/questions/submit', json={
            'questions': question_payload(12),
            'submission_id': 'batch-1'
        })

        assert response.status_code == 201
        data = response.get_json()['data']
        assert len(data['ids']) == 12
        assert store.count("questions") == 12

        progress = client.get('/api/questions/submit/batch-1/progress').get_json()['data']
        assert progress['status'] == 'complete'
        assert progress['percent'] == 100

    def test_submit_refused_when_invalid(self, client, store):
        questions = question_payload(3)
        questions[0]['type'] = 'MCQ'

        response = client.post('/api/questions/submit', json={
            'questions': questions, 'submission_id': 'batch-2'
        })

        assert response.status_code == 400
        data = response.get_json()
        assert data['error'] == "Please fix validation errors before submitting"
        assert data['validation_errors'] == {'0': ['Invalid question type "MCQ"']}
        assert store.count("questions") == 0

        progress = client.get('/api/questions/submit/batch-2/progress').get_json()['data']
        assert progress['status'] == 'error'

    def test_submit_write_failure(self, client, store, monkeypatch):
        original_create = store.create

        def flaky_create(collection, data):
            if data['title'] == "Q #7":
                raise PersistenceError("quota exceeded")
            return original_create(collection, data)

        monkeypatch.setattr(store, 'create', flaky_create)

        response = client.post('/api/questions/submit', json={'questions': question_payload(12)})

        assert response.status_code == 500
        data = response.get_json()
        assert data['error_code'] == 'SUBMISSION_FAILED'
        assert data['error'] == "Failed to save questions: quota exceeded"
        assert data['persisted_count'] >= 5

    def test_reused_id_rejected_while_in_progress(self, client, store, monkeypatch):
        running = {'percent': 40, 'uploaded': 5, 'total': 12, 'status': 'in_progress',
                   'error': None}
        monkeypatch.setitem(api.submission_progress, 'batch-3', running)

        response = client.post('/api/questions/submit', json={
            'questions': question_payload(2), 'submission_id': 'batch-3'
        })

        assert response.status_code == 409
        assert response.get_json()['error_code'] == 'SUBMISSION_IN_PROGRESS'
        assert store.count("questions") == 0
        progress = client.get('/api/questions/submit/batch-3/progress').get_json()['data']
        assert progress['percent'] == 40

    def test_finished_id_can_be_reused(self, client, store):
        for _ in range(2):
            response = client.post('/api/questions/submit', json={
                'questions': question_payload(1), 'submission_id': 'batch-4'
            })
            assert response.status_code == 201

        assert store.count("questions") == 2

    def test_unknown_submission(self, client):
        response = client.get('/api/questions/submit/nope/progress')
        assert response.status_code == 404


class TestQuestionEndpoints:

    def test_create_get_update(self, client):
        response = client.post('/api/questions', json={
            'title': 'Passage #3', 'type': 'RFIB',
            'content': 'The cat (Answer: sat) down.', 'text': 'one\ntwo'
        })
        assert response.status_code == 201
        question_id = response.get_json()['data']['id']

        response = client.get(f'/api/questions/{question_id}')
        data = response.get_json()['data']
        assert data['title'] == 'Passage #3'
        assert {'text': '(Answer: sat)', 'is_answer': True} in data['passage']
        assert data['explanation'] == ['one', 'two']

        response = client.put(f'/api/questions/{question_id}', json={
            'title': 'Passage #3 edited', 'type': 'RWFIB', 'content': 'c', 'text': 't'
        })
        assert response.status_code == 200
        assert client.get(f'/api/questions/{question_id}').get_json()['data']['type'] == 'RWFIB'

    def test_create_invalid(self, client):
        response = client.post('/api/questions', json={'title': '', 'content': '', 'text': 't'})

        assert response.status_code == 400
        assert response.get_json()['errors'] == ["Title is required", "Content is required"]

    def test_get_missing(self, client):
        response = client.get('/api/questions/absent')
        assert response.status_code == 404

    def test_update_missing(self, client):
        response = client.put('/api/questions/absent', json={
            'title': 'T', 'type': 'RWFIB', 'content': 'c', 'text': 't'
        })
        assert response.status_code == 404

    def test_list_grouped_with_search(self, client):
        for title, question_type in [("Birds #2", "RWFIB"), ("Birds #1", "RWFIB"),
                                     ("Cats #1", "RFIB")]:
            client.post('/api/questions', json={
                'title': title, 'type': question_type, 'content': 'c', 'text': 't'
            })

        data = client.get('/api/questions').get_json()['data']
        assert [q['title'] for q in data['RWFIB']] == ["Birds #1", "Birds #2"]
        assert [q['title'] for q in data['RFIB']] == ["Cats #1"]

        data = client.get('/api/questions?search=cats').get_json()['data']
        assert data['RWFIB'] == []
        assert len(data['RFIB']) == 1


class TestLookupEndpoints:

    def test_word_lookup_miss_then_hit(self, client, store, translation_service):
        response = client.get('/api/words/Hello!')

        assert response.status_code == 200
        data = response.get_json()['data']
        assert data['vietnamese'] == "xin chào"
        assert data['images'] == ["u1", "u2"]
        assert data['partOfSpeech'] == ""
        assert store.get("dictionary", "hello") is not None

        client.get('/api/words/HELLO')
        assert translation_service.calls == ["Hello!"]

    def test_word_lookup_failure(self, client, store, image_service):
        image_service.fail = True

        response = client.get('/api/words/hello')

        assert response.status_code == 502
        assert response.get_json()['error_code'] == 'LOOKUP_FAILED'
        assert store.count("dictionary") == 0

    def test_translate(self, client):
        response = client.get('/api/translate?text=hello')

        assert response.status_code == 200
        assert response.get_json()['data']['text'] == "xin chào"

    def test_translate_requires_text(self, client):
        response = client.get('/api/translate')

        assert response.status_code == 400
        assert response.get_json()['error'] == "Text parameter is required"

    def test_images(self, client):
        response = client.get('/api/images?query=cat')

        assert response.status_code == 200
        assert [image['url'] for image in response.get_json()['data']['images']] == ["u1", "u2"]

    def test_images_requires_query(self, client):
        response = client.get('/api/images')

        assert response.status_code == 400

"""
Test cases for the quiz REST endpoints.
"""
from quizcraft import db
from quizcraft.quiz.models import Question, Quiz, load_json_list
from quizcraft.quiz.service import QuizService


def create_quiz(client, payload):
    response = client.post('/api/quizzes', json=payload)
    assert response.status_code == 201
    return response.get_json()['quiz']


class TestCreateQuiz:
    """Test cases for POST /api/quizzes."""

    def test_create_returns_quiz_with_questions(self, client, sample_payload):
        response = client.post('/api/quizzes', json=sample_payload)
        assert response.status_code == 201

        data = response.get_json()
        assert data['success'] is True
        quiz = data['quiz']
        assert quiz['title'] == 'JavaScript Fundamentals'
        assert quiz['questionCount'] == 3
        assert [q['type'] for q in quiz['questions']] == ['BOOLEAN', 'INPUT', 'CHECKBOX']
        assert quiz['questions'][2]['options'] == ['String', 'Number', 'Boolean']
        assert quiz['questions'][2]['correctAnswers'] == [True, True, False]
        assert quiz['questions'][2]['required'] is False
        assert all(q['id'] for q in quiz['questions'])

    def test_lists_stored_as_json_text(self, app, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        with app.app_context():
            row = db.session.get(Question, quiz['questions'][1]['id'])
            assert row.correct_answers == '["var", "let", "const"]'
            assert row.options is None

    def test_validation_error(self, client):
        response = client.post('/api/quizzes', json={'title': '', 'questions': [{'type': 'ESSAY'}]})
        assert response.status_code == 400
        data = response.get_json()
        assert data['success'] is False
        assert 'title is required' in data['errors']

    def test_numeric_accepted_answers(self, client):
        response = client.post('/api/quizzes', json={
            'title': 'Numbers',
            'questions': [{'type': 'INPUT', 'text': 'Six times seven?', 'correctAnswers': [42]}],
        })
        assert response.status_code == 201
        quiz = response.get_json()['quiz']
        assert quiz['questions'][0]['correctAnswers'] == [42]

        graded = client.post(f"/api/quizzes/{quiz['id']}/grade", json={
            'answers': {quiz['questions'][0]['id']: ' 42 '},
        })
        assert graded.get_json()['results'][0]['correct'] is True

    def test_non_json_body(self, client):
        response = client.post('/api/quizzes', data='not json', content_type='text/plain')
        assert response.status_code == 400


class TestReadQuizzes:
    """Test cases for GET /api/quizzes and GET /api/quizzes/<id>."""

    def test_list(self, client, sample_payload):
        create_quiz(client, sample_payload)
        response = client.get('/api/quizzes')
        assert response.status_code == 200
        quizzes = response.get_json()['quizzes']
        assert len(quizzes) == 1
        assert quizzes[0]['questionCount'] == 3
        assert 'questions' not in quizzes[0]

    def test_get_one(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.get(f"/api/quizzes/{quiz['id']}")
        assert response.status_code == 200
        assert response.get_json()['quiz'] == quiz

    def test_get_missing(self, client):
        response = client.get('/api/quizzes/does-not-exist')
        assert response.status_code == 404
        assert response.get_json()['error'] == 'Quiz with ID does-not-exist not found'


class TestUpdateQuiz:
    """Test cases for PATCH /api/quizzes/<id>."""

    def test_title_only_keeps_questions(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.patch(f"/api/quizzes/{quiz['id']}", json={'title': 'JS Basics'})
        assert response.status_code == 200
        updated = response.get_json()['quiz']
        assert updated['title'] == 'JS Basics'
        assert [q['id'] for q in updated['questions']] == [q['id'] for q in quiz['questions']]

    def test_questions_are_replaced(self, app, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.patch(f"/api/quizzes/{quiz['id']}", json={
            'questions': [{'type': 'INPUT', 'text': 'Capital of France?', 'correctAnswers': ['Paris']}],
        })
        assert response.status_code == 200
        updated = response.get_json()['quiz']
        assert updated['title'] == 'JavaScript Fundamentals'
        assert updated['questionCount'] == 1
        assert updated['questions'][0]['text'] == 'Capital of France?'
        with app.app_context():
            assert Question.query.count() == 1

    def test_put_is_accepted(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.put(f"/api/quizzes/{quiz['id']}", json={'title': 'Renamed'})
        assert response.status_code == 200

    def test_invalid_update(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.patch(f"/api/quizzes/{quiz['id']}", json={'title': ''})
        assert response.status_code == 400

    def test_update_missing(self, client):
        response = client.patch('/api/quizzes/nope', json={'title': 'x'})
        assert response.status_code == 404


class TestDeleteQuiz:
    """Test cases for DELETE /api/quizzes/<id>."""

    def test_delete_cascades_to_questions(self, app, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.delete(f"/api/quizzes/{quiz['id']}")
        assert response.status_code == 204
        assert client.get(f"/api/quizzes/{quiz['id']}").status_code == 404
        with app.app_context():
            assert Quiz.query.count() == 0
            assert Question.query.count() == 0

    def test_delete_missing(self, client):
        assert client.delete('/api/quizzes/nope').status_code == 404


class TestGradeQuiz:
    """Test cases for POST /api/quizzes/<id>/grade."""

    def test_all_correct(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        ids = [q['id'] for q in quiz['questions']]
        response = client.post(f"/api/quizzes/{quiz['id']}/grade", json={
            'answers': {ids[0]: False, ids[1]: 'LET  ', ids[2]: [True, True, False]},
        })
        assert response.status_code == 200
        data = response.get_json()
        assert data['score'] == {'correct': 3, 'total': 3, 'percentage': 100}
        assert data['feedback']['message'] == 'Excellent work!'
        assert [result['correct'] for result in data['results']] == [True, True, True]
        assert data['results'][2]['expectedAnswer'] == 'String, Number'

    def test_no_answers(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.post(f"/api/quizzes/{quiz['id']}/grade", json={})
        assert response.status_code == 200
        assert response.get_json()['score'] == {'correct': 1, 'total': 3, 'percentage': 33}

    def test_unanswered_incorrect_config(self, app, client, sample_payload):
        app.config['TREAT_UNANSWERED_AS_INCORRECT'] = True
        quiz = create_quiz(client, sample_payload)
        response = client.post(f"/api/quizzes/{quiz['id']}/grade", json={'answers': {}})
        assert response.get_json()['score']['correct'] == 0

    def test_empty_quiz(self, client):
        quiz = create_quiz(client, {'title': 'Empty', 'questions': []})
        response = client.post(f"/api/quizzes/{quiz['id']}/grade", json={'answers': {}})
        assert response.get_json()['score'] == {'correct': 0, 'total': 0, 'percentage': 0}

    def test_answers_must_be_object(self, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        response = client.post(f"/api/quizzes/{quiz['id']}/grade", json={'answers': [True]})
        assert response.status_code == 400

    def test_grade_missing_quiz(self, client):
        response = client.post('/api/quizzes/nope/grade', json={'answers': {}})
        assert response.status_code == 404


class TestServiceLayer:
    """Test cases for QuizService outside of a request."""

    def test_snapshot_keeps_question_order(self, app_context, sample_payload):
        quiz = QuizService.create(sample_payload)
        snapshot = quiz.to_snapshot()
        assert [q.question_type.value for q in snapshot.questions] == ['BOOLEAN', 'INPUT', 'CHECKBOX']
        assert snapshot.questions[2].options == ['String', 'Number', 'Boolean']

    def test_corrupt_stored_answers_grade_as_incorrect(self, app_context, sample_payload):
        quiz = QuizService.create(sample_payload)
        row = quiz.questions.all()[1]
        row.correct_answers = '{not json'
        db.session.commit()

        report = QuizService.grade(quiz.id, {row.id: 'var'})
        assert report.results[1] is False

    def test_non_string_stored_options_grade_over_http(self, app, client, sample_payload):
        quiz = create_quiz(client, sample_payload)
        question_id = quiz['questions'][2]['id']
        with app.app_context():
            row = db.session.get(Question, question_id)
            row.options = '[1, 2, 3]'
            db.session.commit()

        response = client.post(f"/api/quizzes/{quiz['id']}/grade", json={
            'answers': {question_id: [True, True, False]},
        })
        assert response.status_code == 200
        result = response.get_json()['results'][2]
        assert result['correct'] is True
        assert result['expectedAnswer'] == '1, 2'

    def test_load_json_list(self):
        assert load_json_list(None) is None
        assert load_json_list('[]') == []
        assert load_json_list('{"a": 1}') is None


class TestSeedCommand:

    def test_seed_db_creates_sample_quiz(self, app, client):
        result = app.test_cli_runner().invoke(args=['seed-db'])
        assert result.exit_code == 0
        assert 'Sample quiz created' in result.output

        quizzes = client.get('/api/quizzes').get_json()['quizzes']
        assert [quiz['title'] for quiz in quizzes] == ['JavaScript Fundamentals']
        assert quizzes[0]['questionCount'] == 3


class TestErrorHandlers:

    def test_unknown_api_route_returns_json(self, client):
        response = client.get('/api/unknown')
        assert response.status_code == 404
        assert response.get_json()['success'] is False

    def test_method_not_allowed(self, client):
        response = client.post('/api/quizzes/abc')
        assert response.status_code == 405
        assert response.get_json()['success'] is False

    def test_index(self, client):
        assert client.get('/').get_json()['name'] == 'QuizCraft'

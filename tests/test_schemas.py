import pytest

from schemas import (
    BlogCreate, BlogUpdate, LoginRequest, MessageCreate, PayloadError, ProjectCreate,
    normalize_tags, validate_payload
)


@pytest.mark.parametrize('value, expected', [
    (None, []),
    ('', []),
    ('a, b,,c ', ['a', 'b', 'c']),
    ([' Flask ', '', 'SQL'], ['Flask', 'SQL']),
])
def test_normalize_tags(value, expected):
    assert normalize_tags(value) == expected


def test_camel_case_aliases():
    project = ProjectCreate.model_validate({
        'title': 'Site', 'description': 'Desc', 'imageUrl': 'https://x/y.png', 'githubUrl': ' ',
    })
    assert project.image_url == 'https://x/y.png'
    assert project.github_url is None
    assert project.technologies == []
    assert project.featured is False


def test_unknown_fields_ignored():
    blog = BlogCreate.model_validate({'title': 't', 'excerpt': 'e', 'content': 'c', 'views': 10})
    assert not hasattr(blog, 'views')
    assert blog.read_time == 5


def test_update_tracks_only_given_fields():
    update = BlogUpdate.model_validate({'readTime': 3})
    assert update.model_dump(exclude_unset=True) == {'read_time': 3}


def test_tag_list_rejects_non_strings():
    with pytest.raises(PayloadError) as exc:
        validate_payload(BlogCreate, 'Invalid blog data',
                         data={'title': 't', 'excerpt': 'e', 'content': 'c', 'tags': ['ok', 3]})
    assert exc.value.errors[0]['field'].startswith('tags')


def test_validate_payload_reports_fields():
    with pytest.raises(PayloadError) as exc:
        validate_payload(MessageCreate, 'Invalid message data',
                         data={'name': 'A', 'email': 'a@b', 'message': 'hi'})
    assert exc.value.message == 'Invalid message data'
    assert exc.value.errors == [{'field': 'email', 'message': 'Invalid email address'}]
    assert exc.value.to_dict()['message'] == 'Invalid message data'


def test_validate_payload_requires_object():
    with pytest.raises(PayloadError) as exc:
        validate_payload(LoginRequest, 'Invalid login data', data=['admin', 'admin123'])
    assert exc.value.errors[0]['field'] == ''


def test_login_password_not_stripped():
    login = LoginRequest.model_validate({'username': 'admin', 'password': ' pass '})
    assert login.password == ' pass '


def test_form_values_are_coerced_when_not_strict():
    form = {'title': 't', 'excerpt': 'e', 'content': 'c', 'readTime': '4', 'published': True}
    blog = validate_payload(BlogCreate, 'Invalid blog data', data=form, strict=False)
    assert blog.read_time == 4

    with pytest.raises(PayloadError) as exc:
        validate_payload(BlogCreate, 'Invalid blog data', data=form)
    assert [e['field'] for e in exc.value.errors] == ['readTime']

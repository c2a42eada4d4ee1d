"""
Example survey builder.

Builds a small customer-feedback survey with one question of every type,
an owner and a read-only reviewer.
"""
from surveykit.model import Permission, QuestionType, User
from surveykit.question import Question
from surveykit.survey import Survey


def build_example_survey(name: str = "Customer Feedback") -> Survey:
    survey = Survey(
        name=name,
        description="Quarterly feedback from customers of the online store",
    )

    survey.add_question(Question(
        id="q_channel",
        text="How did you hear about us?",
        question_type=QuestionType.DROPDOWN,
        choices=["Search engine", "Friend", "Advertisement", "Other"],
    ))
    survey.add_question(Question(
        id="q_recommend",
        text="Would you recommend us to a friend?",
        question_type=QuestionType.RADIO,
        choices=["Yes", "No", "Not sure"],
    ))
    survey.add_question(Question(
        id="q_features",
        text="Which features do you use?",
        question_type=QuestionType.CHECKBOX,
        choices=["Wishlist", "Reviews", "Gift cards"],
    ))
    survey.add_question(Question(
        id="q_rating",
        text="Rate your overall experience",
        question_type=QuestionType.RATING,
    ))
    survey.add_question(Question(
        id="q_comments",
        text="Anything else you would like to tell us?",
        question_type=QuestionType.TEXT,
    ))

    survey.add_user(User(id="u_owner", user_name="alice", permission=Permission.OWNER))
    survey.add_user(User(id="u_reviewer", user_name="bob", permission=Permission.READ))

    return survey

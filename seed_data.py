import random
from datetime import datetime, timedelta, timezone
from sqlmodel import Session, SQLModel
from models import User, Post, Comment
from auth.security import get_password_hash
from dependencies import engine

# Data pools
FIRST_NAMES = [
    "Juan", "María", "Alberto", "Lucía", "Pedro", "Ana", "Carlos", "Sofia",
    "John", "Emma", "Michael", "Sarah", "David", "Isabella", "James", "Laura"
]

LAST_NAMES = [
    "Domínguez", "García", "Rodríguez", "López", "Martínez", "González",
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Miller", "Davis"
]

POST_TITLES = [
    "Math Society study night",
    "Board games in the commons",
    "Intro to Docker workshop",
    "Pickup basketball",
    "Resume review drop-in",
    "Robotics club open house",
    "Film screening and discussion",
    "Hackathon team formation",
]

POST_BODIES = [
    "Bring your laptop and questions, snacks provided.",
    "Everyone is welcome, no experience needed.",
    "We will walk through the basics and then pair up.",
    "Come for an hour or stay all evening.",
    "Limited space, first come first served.",
]

LOCATIONS = [
    "Deerfield Hall", "Instructional Centre", "Student Centre",
    "Library 2nd floor", "Athletics Centre"
]

TAGS = ["Clubs", "Math", "MCS", "Sports", "Career", "Social", "Tech"]

COMMENTS = [
    "Count me in!",
    "Is this open to first years?",
    "Can I bring a friend?",
    "What time does it end?",
    "Saw this last term, highly recommend.",
    "Will there be food?",
    "Is registration required?",
]


def random_date(start_date, end_date):
    time_between = end_date - start_date
    days_between = time_between.days
    random_number_of_days = random.randrange(days_between)
    random_time = timedelta(
        hours=random.randint(0, 23),
        minutes=random.randint(0, 59),
        seconds=random.randint(0, 59)
    )
    return start_date + timedelta(days=random_number_of_days) + random_time


def create_test_data(num_users: int = 10, num_posts: int = 50):
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        # Create users with random names
        users = []
        for i in range(num_users):
            first_name = random.choice(FIRST_NAMES)
            last_name = random.choice(LAST_NAMES)
            username = f"{first_name.lower()}{i}{random.randint(1, 999)}"

            user = User(
                username=username,
                email=f"{username}@example.com",
                first_name=first_name,
                last_name=last_name,
                password=get_password_hash("password123"),
            )
            users.append(user)

        session.add_all(users)
        session.commit()

        # Create posts with random content and dates
        posts = []
        post_dates = []
        start_date = datetime(2023, 1, 1, tzinfo=timezone.utc)
        end_date = datetime.now(timezone.utc)
        for i in range(num_posts):
            user = random.choice(users)
            created_at = random_date(start_date, end_date)
            post_dates.append(created_at)
            post = Post(
                user_id=user.id,
                title=random.choice(POST_TITLES),
                body=random.choice(POST_BODIES),
                location=random.choice(LOCATIONS),
                capacity=random.choice([10, 20, 40, 100]),
                tags=", ".join(random.sample(TAGS, random.randint(1, 3))),
                feedback_score=random.randint(-3, 25),
                created_at=created_at,
            )
            posts.append(post)

        session.add_all(posts)
        session.commit()

        # Each post gets a few comments from other users
        comments = []
        for post, posted_at in zip(posts, post_dates):
            possible_authors = [u for u in users if u.id != post.user_id] or users
            for author in random.sample(possible_authors, min(random.randint(0, 4), len(possible_authors))):
                comment = Comment(
                    body=random.choice(COMMENTS),
                    post_id=post.id,
                    user_id=author.id,
                    created_at=posted_at + timedelta(minutes=random.randint(1, 60 * 24 * 7)),
                )
                comments.append(comment)

        session.add_all(comments)
        session.commit()

        print("Test data created successfully!")
        print(f"Created {len(users)} users")
        print(f"Created {len(posts)} posts")
        print(f"Created {len(comments)} comments")

if __name__ == "__main__":
    create_test_data()

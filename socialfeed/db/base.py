# Import all models here so metadata.create_all sees every table
from socialfeed.db.session import Base

from socialfeed.modules.user_management.models.user import User
from socialfeed.modules.posts.models.post import Post
from socialfeed.modules.posts.comments.models.comment import Comment
from socialfeed.modules.posts.reactions.models.reaction import Reaction

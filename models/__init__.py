from .user import User
from .news_article import NewsArticle
from .prediction import Prediction

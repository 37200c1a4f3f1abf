# content_analyst/db/mongo.py
from pymongo import MongoClient

from content_analyst import config

client = None


def get_db():
    global client
    if client is None:
        if not config.MONGO_URI:
            raise RuntimeError("MONGO_URI not set in environment")
        client = MongoClient(config.MONGO_URI)
    return client[config.MONGO_DB]


def get_collection(name):
    return get_db()[name]

from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, ForeignKey, Index
from sqlalchemy.ext.associationproxy import association_proxy
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from blog_api.database import Base


class Post(Base):
    """
    Blog article written by a user and filed under a category
    """
    __tablename__ = "posts"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(100), nullable=False)
    slug = Column(String(120), unique=True, index=True, nullable=False)
    content = Column(Text, nullable=False)
    excerpt = Column(String(200), nullable=True)
    featured_image = Column(String, default="default-post.jpg", nullable=False)
    is_published = Column(Boolean, default=False, nullable=False)
    view_count = Column(Integer, default=0, nullable=False)

    # References
    author_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)

    # Metadata
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    author = relationship("User", back_populates="posts")
    category = relationship("Category", back_populates="posts")
    comments = relationship(
        "Comment",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="Comment.id",
    )
    tag_rows = relationship(
        "PostTag",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostTag.id",
    )

    # Read and assign tags as a plain list of names
    tags = association_proxy("tag_rows", "name", creator=lambda name: PostTag(name=name))

    def __repr__(self):
        return f"<Post(id={self.id}, title='{self.title[:30]}...', published={self.is_published})>"


class Comment(Base):
    """
    Comment left by a user on a post
    """
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    content = Column(String(1000), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    post = relationship("Post", back_populates="comments")
    user = relationship("User", back_populates="comments")

    def __repr__(self):
        return f"<Comment(id={self.id}, post_id={self.post_id}, user_id={self.user_id})>"


class PostTag(Base):
    """
    Single tag attached to a post
    """
    __tablename__ = "post_tags"

    id = Column(Integer, primary_key=True, index=True)
    post_id = Column(Integer, ForeignKey("posts.id", ondelete="CASCADE"), nullable=False)
    name = Column(String(50), nullable=False)

    post = relationship("Post", back_populates="tag_rows")

    def __repr__(self):
        return f"<PostTag(post_id={self.post_id}, name='{self.name}')>"


# Database indexes for the public listing queries
Index("idx_posts_published_created", Post.is_published, Post.created_at)
Index("idx_posts_category", Post.category_id)
Index("idx_posts_author", Post.author_id)
Index("idx_comments_post", Comment.post_id)
Index("idx_post_tags_post", PostTag.post_id)

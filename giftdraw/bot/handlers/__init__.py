from aiogram import Router

from giftdraw.bot.handlers import codes, fallback, reveal, setup, start

router = Router()
router.include_router(start.router)
router.include_router(setup.router)
router.include_router(codes.router)
router.include_router(reveal.router)
router.include_router(fallback.router)
